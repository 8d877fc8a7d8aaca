"""CLI tests for auth command group."""
import json
from datetime import datetime, timedelta
from unittest.mock import MagicMock, patch

import httpx
from typer.testing import CliRunner

from spotify_status.commands.auth_cmd import app
from spotify_status.models.auth import TokenStatus
from spotify_status.utils.errors import AuthError

runner = CliRunner()


# ── status ───────────────────────────────────────────────────────────

def _health(token):
    return httpx.Response(
        200,
        json={"status": "ok", "cache": {}, "token": token},
        request=httpx.Request("GET", "http://127.0.0.1:5000/health"),
    )


def test_status_reads_token_from_running_server():
    token = {
        "has_token": True,
        "is_expired": False,
        "expires_at": (datetime.now() + timedelta(minutes=59)).isoformat(),
        "seconds_remaining": 3540,
    }

    with patch("spotify_status.commands.auth_cmd.httpx.get", return_value=_health(token)) as get:
        result = runner.invoke(app, ["status", "--url", "http://host:5000/health", "--output", "json"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["has_token"] is True
    assert data["seconds_remaining"] == 3540
    assert get.call_args[0][0] == "http://host:5000/health"


def test_status_before_first_token():
    token = {"has_token": False, "is_expired": True, "expires_at": None, "seconds_remaining": None}

    with patch("spotify_status.commands.auth_cmd.httpx.get", return_value=_health(token)):
        result = runner.invoke(app, ["status", "--output", "json"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["has_token"] is False
    assert data["expires_at"] == "N/A"


def test_status_server_unreachable():
    with patch("spotify_status.commands.auth_cmd.httpx.get", side_effect=httpx.ConnectError("refused")):
        result = runner.invoke(app, ["status"])
    assert result.exit_code == 1
    assert '"code": "UPSTREAM_UNAVAILABLE"' in result.stdout


def test_status_server_error_status():
    resp = httpx.Response(500, text="boom", request=httpx.Request("GET", "http://127.0.0.1:5000/health"))

    with patch("spotify_status.commands.auth_cmd.httpx.get", return_value=resp):
        result = runner.invoke(app, ["status"])
    assert result.exit_code == 1
    assert '"code": "UPSTREAM_UNAVAILABLE"' in result.stdout


def test_status_unexpected_health_body():
    resp = httpx.Response(200, json={"status": "ok"}, request=httpx.Request("GET", "http://127.0.0.1:5000/health"))

    with patch("spotify_status.commands.auth_cmd.httpx.get", return_value=resp):
        result = runner.invoke(app, ["status"])
    assert result.exit_code == 1
    assert '"code": "MALFORMED_RESPONSE"' in result.stdout


# ── refresh ──────────────────────────────────────────────────────────

def test_refresh_success():
    auth = MagicMock()
    auth.get_status.return_value = TokenStatus(
        has_token=True, is_expired=False,
        expires_at=datetime.now() + timedelta(minutes=59),
        seconds_remaining=3540,
    )

    with patch("spotify_status.commands.auth_cmd.get_config", return_value=MagicMock()), \
         patch("spotify_status.commands.auth_cmd.AuthManager", return_value=auth):
        result = runner.invoke(app, ["refresh", "--output", "json"])
    assert result.exit_code == 0
    auth.get_token.assert_called_once_with(force_refresh=True)
    assert '"status": "refreshed"' in result.stdout


def test_refresh_failure():
    auth = MagicMock()
    auth.get_token.side_effect = AuthError("Token refresh failed (HTTP 400): invalid_grant")

    with patch("spotify_status.commands.auth_cmd.get_config", return_value=MagicMock()), \
         patch("spotify_status.commands.auth_cmd.AuthManager", return_value=auth):
        result = runner.invoke(app, ["refresh"])
    assert result.exit_code == 1
    assert '"code": "AUTH_ERROR"' in result.stdout
    auth.close.assert_called_once()
