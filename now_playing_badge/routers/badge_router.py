"""Badge endpoint.

Every path and method is served by the same handler; there is no routing table.
"""

import httpx
from fastapi import APIRouter, Depends
from fastapi.responses import Response

from now_playing_badge.config import Settings
from now_playing_badge.dependencies import get_app_settings, get_http_client
from now_playing_badge.services import badge_service

router = APIRouter()

SVG_MEDIA_TYPE = "image/svg+xml"

# Image proxies (e.g. GitHub camo) must not pin an old track
NO_CACHE_HEADERS = {"Cache-Control": "no-cache, no-store, must-revalidate"}

BADGE_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def svg_response(content: str) -> Response:
    """Wrap an SVG document in a 200 response."""
    return Response(content=content, status_code=200, media_type=SVG_MEDIA_TYPE, headers=NO_CACHE_HEADERS)


@router.api_route(
    "/{path:path}",
    methods=BADGE_METHODS,
    summary="Now playing badge",
    description="""
    Returns an SVG badge for the track currently playing on the configured Spotify account.

    Always responds 200 with `image/svg+xml`. When nothing is playing, or any upstream
    call fails, the badge reads "No song currently playing".
    """,
    response_class=Response,
    responses={200: {"content": {SVG_MEDIA_TYPE: {}}, "description": "SVG badge"}},
)
async def get_badge(
    path: str,
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_app_settings),
) -> Response:
    """Render the now-playing badge."""
    return svg_response(await badge_service.build_badge(client, settings))
