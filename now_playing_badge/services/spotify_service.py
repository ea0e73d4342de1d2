"""Spotify Web API service."""

from typing import Any

import httpx

from now_playing_badge.exceptions import DataShapeError, UpstreamAuthError, UpstreamPlaybackError
from now_playing_badge.models import SpotifyCredentials

TOKEN_URL = "https://accounts.spotify.com/api/token"
CURRENTLY_PLAYING_URL = "https://api.spotify.com/v1/me/player/currently-playing"

NOT_PLAYING: dict[str, Any] = {"is_playing": False}


async def get_access_token(client: httpx.AsyncClient, credentials: SpotifyCredentials) -> str:
    """
    Exchange the refresh token for a short-lived access token.

    The token is used for a single badge request and never cached.

    Args:
        client: Shared HTTP client from dependency injection.
        credentials: Client identity and refresh token.

    Returns:
        Access token string.

    Raises:
        UpstreamAuthError: If the token endpoint is unreachable or rejects the request.
        DataShapeError: If the response carries no access token.
    """
    try:
        response = await client.post(
            TOKEN_URL,
            auth=(credentials.client_id, credentials.client_secret),
            data={"grant_type": "refresh_token", "refresh_token": credentials.refresh_token},
        )
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise UpstreamAuthError(
            f"Failed to fetch Spotify token: {e.response.reason_phrase}",
            status_code=e.response.status_code,
        ) from e
    except httpx.HTTPError as e:
        raise UpstreamAuthError(f"Spotify token request failed: {e}") from e

    try:
        access_token = response.json()["access_token"]
    except (KeyError, TypeError, ValueError) as e:
        raise DataShapeError(f"Invalid Spotify token response: {e!r}") from e

    if not isinstance(access_token, str) or not access_token:
        raise DataShapeError("Invalid Spotify token response: access_token is not a string")

    return access_token


async def get_currently_playing(client: httpx.AsyncClient, access_token: str) -> dict[str, Any]:
    """
    Get the account's currently playing track.

    Args:
        client: Shared HTTP client from dependency injection.
        access_token: Bearer token from get_access_token.

    Returns:
        The parsed JSON body as-is. An empty, 204 or non-JSON body means nothing
        is playing and yields ``{"is_playing": False}``.

    Raises:
        UpstreamPlaybackError: If the request fails or returns a non-success status.
    """
    try:
        response = await client.get(
            CURRENTLY_PLAYING_URL,
            headers={"Authorization": f"Bearer {access_token}"},
        )
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise UpstreamPlaybackError(
            f"Failed to fetch currently playing song: {e.response.reason_phrase}",
            status_code=e.response.status_code,
        ) from e
    except httpx.HTTPError as e:
        raise UpstreamPlaybackError(f"Currently playing request failed: {e}") from e

    if response.status_code == 204 or not response.content:
        return dict(NOT_PLAYING)

    try:
        return response.json()
    except ValueError:
        return dict(NOT_PLAYING)
