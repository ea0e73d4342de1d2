"""FastAPI dependencies for dependency injection."""

import httpx
from fastapi import Request

from now_playing_badge.config import Settings


async def get_http_client(request: Request) -> httpx.AsyncClient:
    """
    Get the shared HTTP client from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        The shared AsyncClient instance.

    Raises:
        RuntimeError: If HTTP client is not initialized.
    """
    client: httpx.AsyncClient | None = getattr(request.app.state, "http_client", None)

    if client is None:
        raise RuntimeError("HTTP client not initialized. This should never happen.")

    return client


async def get_app_settings(request: Request) -> Settings:
    """
    Get the settings the application was created with.

    Raises:
        RuntimeError: If settings were not attached by the app factory.
    """
    settings: Settings | None = getattr(request.app.state, "settings", None)

    if settings is None:
        raise RuntimeError("Settings not initialized.")

    return settings
