"""Integration tests for the badge endpoint against a fake Spotify."""

import base64

import httpx
import pytest
from fastapi.testclient import TestClient

from now_playing_badge.core.app_factory import create_app
from now_playing_badge.dependencies import get_http_client
from now_playing_badge.services.spotify_service import CURRENTLY_PLAYING_URL, TOKEN_URL

DEFAULT_TEXT = "No song currently playing"


def assert_svg_response(response: httpx.Response) -> None:
    assert response.status_code == 200
    assert response.headers["content-type"] == "image/svg+xml"
    assert response.headers["cache-control"] == "no-cache, no-store, must-revalidate"
    assert response.text.lstrip().startswith("<svg")


def test_playing_badge(test_client, fake_spotify, spotify_playing_response):
    """Test a playing track renders the populated badge."""
    fake_spotify.playback_json = spotify_playing_response

    response = test_client.get("/")

    assert_svg_response(response)
    body = response.text
    assert f"data:image/jpeg;base64,{base64.b64encode(fake_spotify.image_bytes).decode()}" in body
    assert "Test Song" in body
    assert "by A, B, C" in body
    assert 'from="25.714"' in body
    assert 'to="180"' in body
    assert 'dur="180s"' in body
    assert DEFAULT_TEXT not in body
    assert fake_spotify.urls() == [TOKEN_URL, CURRENTLY_PLAYING_URL, "https://i.scdn.co/image/medium"]


def test_playback_request_uses_fresh_token(test_client, fake_spotify, spotify_playing_response):
    fake_spotify.playback_json = spotify_playing_response

    test_client.get("/")

    playback_request = fake_spotify.requests[1]
    assert playback_request.headers["Authorization"] == "Bearer test-access-token"


def test_not_playing_no_content(test_client, fake_spotify):
    """Test 204 from Spotify renders the default badge."""
    response = test_client.get("/")

    assert_svg_response(response)
    assert DEFAULT_TEXT in response.text
    assert len(fake_spotify.requests) == 2


def test_paused_track(test_client, fake_spotify, spotify_playing_response):
    """Test a paused track renders the default badge without fetching art."""
    spotify_playing_response["is_playing"] = False
    fake_spotify.playback_json = spotify_playing_response

    response = test_client.get("/")

    assert_svg_response(response)
    assert DEFAULT_TEXT in response.text
    assert all("i.scdn.co" not in url for url in fake_spotify.urls())


@pytest.mark.parametrize("stage", ["auth", "playback", "malformed", "image"])
def test_stage_failures_render_default_badge(test_client, fake_spotify, spotify_playing_response, stage):
    """Test a failure at any stage still answers 200 with the default badge."""
    fake_spotify.playback_json = spotify_playing_response
    if stage == "auth":
        fake_spotify.token_status = 401
    elif stage == "playback":
        fake_spotify.playback_status = 500
    elif stage == "malformed":
        fake_spotify.playback_json = {"is_playing": True, "item": {"name": "No artists"}}
    elif stage == "image":
        fake_spotify.image_status = 404

    response = test_client.get("/")

    assert_svg_response(response)
    assert DEFAULT_TEXT in response.text


def test_token_without_access_token(test_client, fake_spotify):
    fake_spotify.token_json = {"error": "invalid_grant"}

    response = test_client.get("/")

    assert_svg_response(response)
    assert DEFAULT_TEXT in response.text
    assert fake_spotify.urls() == [TOKEN_URL]


@pytest.mark.parametrize("missing", ["spotify_client_id", "spotify_client_secret", "spotify_refresh_token"])
def test_missing_credentials(test_settings, upstream_client, fake_spotify, missing):
    """Test missing credentials give the default badge without calling Spotify."""
    app = create_app(test_settings.model_copy(update={missing: ""}))
    app.dependency_overrides[get_http_client] = lambda: upstream_client

    with TestClient(app) as client:
        response = client.get("/")

    assert_svg_response(response)
    assert DEFAULT_TEXT in response.text
    assert fake_spotify.requests == []


@pytest.mark.parametrize("path", ["/", "/badge.svg", "/any/nested/path", "/?cachebust=123"])
def test_any_path_serves_badge(test_client, path):
    response = test_client.get(path)

    assert_svg_response(response)


@pytest.mark.parametrize("method", ["POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
def test_any_method_serves_badge(test_client, method):
    response = test_client.request(method, "/")

    assert_svg_response(response)


def test_head_request(test_client):
    response = test_client.head("/")

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/svg+xml"


def test_identical_state_is_byte_identical(test_client, fake_spotify, spotify_playing_response):
    """Test two requests with the same upstream state produce the same body."""
    fake_spotify.playback_json = spotify_playing_response

    first = test_client.get("/").text
    second = test_client.get("/").text

    assert first == second


def test_server_keeps_serving_after_failure(test_client, fake_spotify, spotify_playing_response):
    fake_spotify.playback_json = spotify_playing_response
    fake_spotify.token_status = 500
    assert DEFAULT_TEXT in test_client.get("/").text

    fake_spotify.token_status = 200
    assert "by A, B, C" in test_client.get("/").text


def test_escaping_in_track_names(test_client, fake_spotify, spotify_playing_response):
    spotify_playing_response["item"]["name"] = "Rock & Roll <Remastered>"
    fake_spotify.playback_json = spotify_playing_response

    response = test_client.get("/")

    assert "Rock &amp; Roll &lt;Remastered&gt;" in response.text


def test_unhandled_error_still_returns_badge(badge_app):
    """Test the last-resort handler answers with the default badge."""

    def broken_client():
        raise RuntimeError("client unavailable")

    badge_app.dependency_overrides[get_http_client] = broken_client

    with TestClient(badge_app, raise_server_exceptions=False) as client:
        response = client.get("/")

    assert_svg_response(response)
    assert DEFAULT_TEXT in response.text


def test_lifespan_creates_and_closes_http_client(test_settings):
    app = create_app(test_settings)

    with TestClient(app):
        client = app.state.http_client
        assert isinstance(client, httpx.AsyncClient)
        assert not client.is_closed

    assert client.is_closed


def test_app_keeps_explicit_settings(test_settings):
    app = create_app(test_settings)

    assert app.state.settings is test_settings


def test_upstream_client_open_while_serving(test_client, upstream_client, fake_spotify):
    test_client.get("/")

    assert not upstream_client.is_closed
    assert len(fake_spotify.requests) == 2
