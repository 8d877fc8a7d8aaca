"""Tests for client.py — auth headers, status handling, payload decoding."""
from unittest.mock import MagicMock

import httpx
import pytest

from spotify_status.client import (
    CURRENTLY_PLAYING_PATH,
    RECENTLY_PLAYED_PATH,
    SpotifyClient,
)
from spotify_status.models.auth import TokenStatus
from spotify_status.utils.errors import AuthError, MalformedResponse, UpstreamUnavailable


@pytest.fixture
def mock_auth():
    auth = MagicMock()
    auth.get_access_token.return_value = "test-token"
    auth.close = MagicMock()
    return auth


@pytest.fixture
def client(fake_config, mock_auth):
    c = SpotifyClient(fake_config, mock_auth)
    c._http = MagicMock()
    return c


def _resp(status_code=200, json_data=None, text=""):
    """Build a fake httpx.Response."""
    r = MagicMock(spec=httpx.Response)
    r.status_code = status_code
    r.text = text
    r.json.return_value = json_data if json_data is not None else {}
    return r


# ── Requests ─────────────────────────────────────────────────────────

def test_get_sends_bearer_token(client):
    client._http.get.return_value = _resp(200)
    client.get(CURRENTLY_PLAYING_PATH)

    headers = client._http.get.call_args[1]["headers"]
    assert headers["Authorization"] == "Bearer test-token"


def test_get_joins_api_base(client):
    client._http.get.return_value = _resp(200)
    client.get(CURRENTLY_PLAYING_PATH)

    assert client._http.get.call_args[0][0] == "https://api.example.test/v1/me/player/currently-playing"


def test_recently_played_requests_limit(client):
    client._http.get.return_value = _resp(200, {"items": []})
    client.recently_played(limit=1)

    assert client._http.get.call_args[0][0].endswith(RECENTLY_PLAYED_PATH)
    assert client._http.get.call_args[1]["params"] == {"limit": 1}


def test_auth_error_propagates_without_request(client, mock_auth):
    mock_auth.get_access_token.side_effect = AuthError("Token refresh failed")

    with pytest.raises(AuthError):
        client.get(CURRENTLY_PLAYING_PATH)
    client._http.get.assert_not_called()


# ── Status handling ──────────────────────────────────────────────────

def test_currently_playing_204_returns_none(client):
    client._http.get.return_value = _resp(204)
    assert client.currently_playing() is None


def test_currently_playing_200_returns_body(client):
    body = {"item": {"name": "A", "artists": [{"name": "B"}]}, "is_playing": True}
    client._http.get.return_value = _resp(200, body)
    assert client.currently_playing() == body


def test_error_status_raises_upstream_unavailable(client):
    client._http.get.return_value = _resp(
        503, {"error": {"status": 503, "message": "Service unavailable"}}
    )
    with pytest.raises(UpstreamUnavailable, match="HTTP 503.*Service unavailable"):
        client.currently_playing()


def test_error_status_with_text_body(client):
    r = _resp(429, text="Too many requests")
    r.json.side_effect = ValueError("no json")
    client._http.get.return_value = r

    with pytest.raises(UpstreamUnavailable, match="Too many requests"):
        client.currently_playing()


def test_network_error_raises_upstream_unavailable(client):
    client._http.get.side_effect = httpx.ConnectTimeout("timed out")

    with pytest.raises(UpstreamUnavailable, match="timed out"):
        client.currently_playing()


# ── Decoding ─────────────────────────────────────────────────────────

def test_non_json_body_is_malformed(client):
    r = _resp(200)
    r.json.side_effect = ValueError("Expecting value")
    client._http.get.return_value = r

    with pytest.raises(MalformedResponse):
        client.recently_played()


def test_non_object_body_is_malformed(client):
    client._http.get.return_value = _resp(200, [1, 2, 3])

    with pytest.raises(MalformedResponse):
        client.currently_playing()


def test_close_closes_auth(client, mock_auth):
    client.close()
    client._http.close.assert_called_once()
    mock_auth.close.assert_called_once()


def test_token_status_comes_from_auth(client, mock_auth):
    mock_auth.get_status.return_value = TokenStatus(has_token=True, is_expired=False)
    assert client.token_status().has_token is True
    mock_auth.get_status.assert_called_once()
