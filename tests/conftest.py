"""Pytest configuration and shared fixtures."""

import asyncio
from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi.testclient import TestClient

from now_playing_badge.config import Settings
from now_playing_badge.core.app_factory import create_app
from now_playing_badge.dependencies import get_http_client
from now_playing_badge.services.spotify_service import CURRENTLY_PLAYING_URL, TOKEN_URL

ARTWORK_HOST = "i.scdn.co"
FAKE_JPEG = b"\xff\xd8\xff\xe0fake-jpeg-bytes"


class FakeSpotify:
    """In-memory stand-in for the Spotify token, playback and image endpoints."""

    def __init__(self):
        self.token_status = 200
        self.token_json: dict | None = {"access_token": "test-access-token", "expires_in": 3600}
        self.playback_status = 200
        self.playback_json: dict | None = None  # None -> 204 No Content
        self.image_status = 200
        self.image_bytes = FAKE_JPEG
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)

        if url == TOKEN_URL:
            if self.token_status != 200:
                return httpx.Response(self.token_status)
            return httpx.Response(200, json=self.token_json)

        if url == CURRENTLY_PLAYING_URL:
            if self.playback_status != 200:
                return httpx.Response(self.playback_status)
            if self.playback_json is None:
                return httpx.Response(204)
            return httpx.Response(200, json=self.playback_json)

        if request.url.host == ARTWORK_HOST:
            return httpx.Response(self.image_status, content=self.image_bytes, headers={"content-type": "image/jpeg"})

        return httpx.Response(404)

    def urls(self) -> list[str]:
        return [str(request.url) for request in self.requests]


@pytest.fixture
def mock_http_client():
    """Mock httpx.AsyncClient for external API calls."""
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get = AsyncMock()
    mock_client.post = AsyncMock()
    mock_client.aclose = AsyncMock()
    return mock_client


@pytest.fixture
def make_response():
    """Factory for real httpx.Response objects bound to a request."""

    def _make(
        status_code: int = 200,
        *,
        json=None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
        method: str = "GET",
        url: str = "https://example.test/",
    ) -> httpx.Response:
        kwargs = {}
        if json is not None:
            kwargs["json"] = json
        elif content is not None:
            kwargs["content"] = content
        return httpx.Response(status_code, headers=headers, request=httpx.Request(method, url), **kwargs)

    return _make


@pytest.fixture
def test_settings():
    """Settings with test credentials, isolated from any local .env file."""
    return Settings(
        _env_file=None,
        api_host="127.0.0.1",
        api_port=3000,
        spotify_client_id="test-client-id",
        spotify_client_secret="test-client-secret",
        spotify_refresh_token="test-refresh-token",
    )


@pytest.fixture
def spotify_playing_response():
    """Currently-playing response for a track 30s into a 3:30 song."""
    return {
        "timestamp": 1700000000000,
        "context": None,
        "progress_ms": 30000,
        "is_playing": True,
        "currently_playing_type": "track",
        "item": {
            "name": "Test Song",
            "duration_ms": 210000,
            "artists": [{"name": "A"}, {"name": "B"}, {"name": "C"}],
            "album": {
                "name": "Test Album",
                "images": [
                    {"url": f"https://{ARTWORK_HOST}/image/large", "width": 640, "height": 640},
                    {"url": f"https://{ARTWORK_HOST}/image/medium", "width": 300, "height": 300},
                    {"url": f"https://{ARTWORK_HOST}/image/small", "width": 64, "height": 64},
                ],
            },
            "uri": "spotify:track:test123",
        },
    }


@pytest.fixture
def fake_spotify():
    return FakeSpotify()


@pytest.fixture
def upstream_client(fake_spotify):
    """Real AsyncClient whose transport is the fake Spotify, closed at teardown."""
    client = httpx.AsyncClient(transport=httpx.MockTransport(fake_spotify.handler))
    yield client
    asyncio.run(client.aclose())


@pytest.fixture
def badge_app(test_settings, upstream_client):
    """Badge app wired to the fake Spotify."""
    app = create_app(test_settings)
    app.dependency_overrides[get_http_client] = lambda: upstream_client
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def test_client(badge_app):
    """FastAPI test client with lifespan context."""
    with TestClient(badge_app) as client:
        yield client
