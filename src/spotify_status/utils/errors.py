"""Exception types and structured error handling for CLI output."""

from __future__ import annotations

import json
import sys

from rich.console import Console

console = Console(stderr=True)


class SpotifyStatusError(RuntimeError):
    """Base class for errors raised by spotify-status."""


class AuthError(SpotifyStatusError):
    """The refresh-token exchange failed."""


class UpstreamUnavailable(SpotifyStatusError):
    """A player endpoint could not be reached or answered with an error."""


class MalformedResponse(UpstreamUnavailable):
    """A player endpoint answered with a payload of unexpected shape."""


# Actionable hints keyed by error substring
_ERROR_HINTS: list[tuple[str, str]] = [
    ("invalid_grant", "Refresh token was revoked — generate a new one and update SPOTIFY_REFRESH_TOKEN"),
    ("invalid_client", "Client credentials rejected — check SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET"),
    ("missing spotify credentials", "Set SPOTIFY_CLIENT_ID, SPOTIFY_CLIENT_SECRET and SPOTIFY_REFRESH_TOKEN in .env"),
    ("401", "Token may be expired — run `spotify-status auth refresh`"),
    ("token", "Token may be expired — run `spotify-status auth refresh`"),
    ("429", "Rate limited — wait a moment and retry"),
    ("rate limit", "Rate limited — wait a moment and retry"),
    ("timeout", "Request timed out — try again or check network connectivity"),
    ("timed out", "Request timed out — try again or check network connectivity"),
    ("connection", "Connection error — check network connectivity"),
]


def _get_hint(error_message: str) -> str | None:
    """Match an error message to an actionable hint."""
    lower = error_message.lower()
    for pattern, hint in _ERROR_HINTS:
        if pattern.lower() in lower:
            return hint
    return None


def _error_code(error: Exception) -> str:
    """Classify an error by type first, then by message."""
    if isinstance(error, AuthError):
        return "AUTH_ERROR"
    if isinstance(error, MalformedResponse):
        return "MALFORMED_RESPONSE"
    if isinstance(error, UpstreamUnavailable):
        return "UPSTREAM_UNAVAILABLE"

    message = str(error).lower()
    if "401" in message or "unauthorized" in message:
        return "AUTH_ERROR"
    if "429" in message or "rate limit" in message:
        return "RATE_LIMITED"
    if "timeout" in message or "timed out" in message:
        return "TIMEOUT"
    if "connection" in message:
        return "CONNECTION_ERROR"
    return "RUNTIME_ERROR"


def handle_error(error: Exception) -> None:
    """Handle an error with structured output to stdout and human-readable output to stderr.

    Outputs a JSON error object to stdout:
    {"error": true, "code": "AUTH_ERROR", "message": "...", "hint": "..."}
    """
    message = str(error)
    hint = _get_hint(message)

    error_obj: dict[str, object] = {
        "error": True,
        "code": _error_code(error),
        "message": message,
    }
    if hint:
        error_obj["hint"] = hint

    json.dump(error_obj, sys.stdout)
    sys.stdout.write("\n")

    # Human-readable to stderr
    console.print(f"[red]Error:[/red] {message}")
    if hint:
        console.print(f"[dim]Hint: {hint}[/dim]")
