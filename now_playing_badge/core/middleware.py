"""Middleware configuration."""

import time

from fastapi import FastAPI, Request

from now_playing_badge.logging_config import get_logger, log_with_context

logger = get_logger(__name__)


def setup_middleware(app: FastAPI) -> None:
    """Configure all middleware for the application.

    Args:
        app: FastAPI application instance
    """

    @app.middleware("http")
    async def log_badge_requests(request: Request, call_next):
        """Log every inbound badge request with its duration."""
        started = time.perf_counter()
        response = await call_next(request)
        log_with_context(
            logger,
            "info",
            "Badge request served",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
            event_type="badge_request",
        )
        return response
