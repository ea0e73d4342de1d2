"""Exception handlers for the application."""

from fastapi import FastAPI, Request
from fastapi.responses import Response

from now_playing_badge.logging_config import get_logger, log_with_context
from now_playing_badge.middleware.logging_middleware import redact_sensitive_data
from now_playing_badge.routers.badge_router import svg_response
from now_playing_badge.views import render_default_badge

logger = get_logger(__name__)


async def general_exception_handler(request: Request, exc: Exception) -> Response:
    """Answer anything that escaped the badge route with the default badge.

    The badge pipeline already catches its own failures; this covers the
    layers around it (dependencies, middleware) so the caller still gets an
    image instead of a 500 page.
    """
    log_with_context(
        logger,
        "error",
        "Unhandled exception",
        error=redact_sensitive_data(str(exc)),
        error_type=type(exc).__name__,
        method=request.method,
        path=request.url.path,
        event_type="unhandled_error",
    )
    logger.error("Exception traceback:", exc_info=exc)

    return svg_response(render_default_badge())


def register_error_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(Exception, general_exception_handler)
