"""CLI commands for authentication management."""

from __future__ import annotations

from typing import Annotated

import httpx
import typer
from rich.console import Console

from spotify_status.config import get_config
from spotify_status.auth import AuthManager
from spotify_status.models.auth import TokenStatus
from spotify_status.utils.errors import (
    MalformedResponse,
    SpotifyStatusError,
    UpstreamUnavailable,
    handle_error,
)
from spotify_status.utils.output import OutputFormat, print_output

console = Console(stderr=True)
app = typer.Typer(name="auth", help="Manage the Spotify access token.")

DEFAULT_HEALTH_URL = "http://127.0.0.1:5000/health"


@app.command()
def status(
    url: Annotated[str, typer.Option("--url", "-u", help="Health endpoint of a running server")] = DEFAULT_HEALTH_URL,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
) -> None:
    """Show the token status held by a running `spotify-status serve`."""
    try:
        response = httpx.get(url, timeout=5.0)
        response.raise_for_status()
        token_status = TokenStatus(**response.json()["token"])
    except httpx.HTTPError as e:
        handle_error(UpstreamUnavailable(f"Could not read token status from {url}: {e}"))
        raise typer.Exit(1)
    except (KeyError, TypeError, ValueError) as e:
        handle_error(MalformedResponse(f"Unexpected health response from {url}: {e}"))
        raise typer.Exit(1)

    result = {
        "has_token": token_status.has_token,
        "is_expired": token_status.is_expired,
        "expires_at": str(token_status.expires_at) if token_status.expires_at else "N/A",
        "seconds_remaining": token_status.seconds_remaining or 0,
    }
    print_output(result, output, title="Token Status")


@app.command()
def refresh(
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
) -> None:
    """Exchange the refresh token for a new access token."""
    config = get_config()
    auth = AuthManager(config)

    try:
        console.print("Refreshing Spotify access token...", style="yellow")
        auth.get_token(force_refresh=True)
        token_status = auth.get_status()
        result = {
            "status": "refreshed",
            "expires_at": str(token_status.expires_at),
            "seconds_remaining": token_status.seconds_remaining,
        }
        print_output(result, output, title="Token Refreshed")
    except SpotifyStatusError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        auth.close()
