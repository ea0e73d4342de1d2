"""Application factory for creating and configuring the FastAPI app."""

from fastapi import FastAPI

from now_playing_badge import __version__
from now_playing_badge.config import Settings, get_settings
from now_playing_badge.core.lifespan import lifespan
from now_playing_badge.core.middleware import setup_middleware
from now_playing_badge.middleware.error_handlers import register_error_handlers
from now_playing_badge.routers import badge_router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to serve with (defaults to the environment singleton)

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Now Playing Badge",
        description="""
        Embeddable SVG badge showing the track currently playing on a Spotify account.

        Any path returns the badge, e.g. `![Now playing](https://your-host/)` in a README.
        """,
        version=__version__,
        lifespan=lifespan,
        # The catch-all badge route owns every path
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    # Configuration is fixed for the lifetime of the app
    app.state.settings = settings or get_settings()

    setup_middleware(app)

    register_error_handlers(app)

    app.include_router(badge_router.router, tags=["badge"])

    return app
