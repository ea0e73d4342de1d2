"""Now-playing badge pipeline.

token exchange -> playback query -> artwork inlining -> SVG rendering,
wrapped in a single failure boundary that always yields a badge.
"""

from typing import Any

import httpx
from pydantic import ValidationError

from now_playing_badge.config import Settings
from now_playing_badge.exceptions import BadgeException, DataShapeError, ErrorCode
from now_playing_badge.logging_config import get_logger, log_with_context
from now_playing_badge.middleware.logging_middleware import redact_sensitive_data
from now_playing_badge.models import NowPlaying, PlaybackState
from now_playing_badge.services import artwork_service, spotify_service
from now_playing_badge.views import render_badge, render_default_badge

logger = get_logger(__name__)

# Spotify lists album images largest first; index 1 is the medium (300px) one
ARTWORK_IMAGE_INDEX = 1


def extract_now_playing(playback: dict[str, Any]) -> NowPlaying | None:
    """Pull the badge fields out of a currently-playing response.

    Returns:
        NowPlaying, or None when nothing is playing.

    Raises:
        DataShapeError: If a playing response lacks the fields the badge needs.
    """
    if not isinstance(playback, dict):
        raise DataShapeError(f"Playback response is not an object: {type(playback).__name__}")

    try:
        state = PlaybackState.model_validate(playback)
    except ValidationError as e:
        raise DataShapeError(f"Invalid playback response: {e.error_count()} validation error(s)") from e

    if not state.is_playing:
        return None

    track = state.item
    if track is None:
        raise DataShapeError("Playback response is playing but has no track item")

    images = track.album.images
    if len(images) <= ARTWORK_IMAGE_INDEX:
        raise DataShapeError(
            "Album has no medium-size image",
            details={"image_count": len(images)},
        )

    return NowPlaying(
        track_name=track.name,
        artist_name=", ".join(artist.name for artist in track.artists),
        progress_ms=state.progress_ms or 0,
        duration_ms=track.duration_ms,
        artwork_url=images[ARTWORK_IMAGE_INDEX].url,
    )


async def _render_current_badge(client: httpx.AsyncClient, settings: Settings) -> str:
    credentials = settings.credentials()
    access_token = await spotify_service.get_access_token(client, credentials)
    playback = await spotify_service.get_currently_playing(client, access_token)

    now_playing = extract_now_playing(playback)
    if now_playing is None:
        return render_default_badge()

    artwork = await artwork_service.inline_artwork(client, now_playing.artwork_url)

    return render_badge(
        artwork,
        now_playing.artist_name,
        now_playing.track_name,
        now_playing.progress_ms,
        now_playing.duration_ms,
    )


async def build_badge(client: httpx.AsyncClient, settings: Settings) -> str:
    """
    Build the badge for the current playback state.

    Never raises: any failure is logged and answered with the default badge,
    so embedding pages never show a broken image.

    Args:
        client: Shared HTTP client from dependency injection.
        settings: Application settings holding the Spotify credentials.

    Returns:
        SVG document.
    """
    try:
        return await _render_current_badge(client, settings)
    except BadgeException as e:
        log_with_context(
            logger,
            "error",
            "Badge pipeline failed, serving default badge",
            error_code=e.code.value,
            error=redact_sensitive_data(e.message),
            details=e.details,
            event_type="badge_fallback",
        )
    except Exception as e:
        log_with_context(
            logger,
            "error",
            "Unexpected badge pipeline error, serving default badge",
            error_code=ErrorCode.INTERNAL_ERROR.value,
            error=redact_sensitive_data(str(e)),
            error_type=type(e).__name__,
            event_type="badge_fallback",
        )
        logger.error("Exception traceback:", exc_info=True)

    return render_default_badge()
