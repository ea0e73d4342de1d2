"""Album artwork download and inlining."""

import base64

import httpx

from now_playing_badge.exceptions import ImageFetchError

DEFAULT_IMAGE_TYPE = "image/jpeg"


def to_data_uri(content: bytes, media_type: str = DEFAULT_IMAGE_TYPE) -> str:
    """Encode image bytes as a ``data:`` URI."""
    return f"data:{media_type};base64,{base64.b64encode(content).decode('ascii')}"


async def inline_artwork(client: httpx.AsyncClient, url: str) -> str:
    """
    Download album artwork and return it as a self-contained data URI.

    Spotify's image CDN serves JPEG, so anything that is not labelled as an
    image is assumed to be one.

    Args:
        client: Shared HTTP client from dependency injection.
        url: Absolute image URL from the playback response.

    Returns:
        ``data:<type>;base64,<bytes>`` string.

    Raises:
        ImageFetchError: If the download fails.
    """
    try:
        response = await client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise ImageFetchError(
            f"Failed to fetch album artwork: {e.response.reason_phrase}",
            status_code=e.response.status_code,
        ) from e
    except httpx.HTTPError as e:
        raise ImageFetchError(f"Album artwork request failed: {e}") from e

    media_type = response.headers.get("content-type", "").split(";")[0].strip().lower()
    if not media_type.startswith("image/"):
        media_type = DEFAULT_IMAGE_TYPE

    return to_data_uri(response.content, media_type)
