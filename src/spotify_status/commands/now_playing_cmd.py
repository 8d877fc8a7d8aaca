"""CLI commands for the now-playing status."""

from __future__ import annotations

import time
from typing import Annotated, Any

import httpx
import typer
from rich.console import Console
from rich.live import Live

from spotify_status.config import get_config
from spotify_status.services.now_playing import NowPlayingService, build_service
from spotify_status.utils.errors import SpotifyStatusError, handle_error
from spotify_status.utils.output import OutputFormat, print_output, status_text

console = Console(stderr=True)
app = typer.Typer(name="now-playing", help="Show what is playing on Spotify.")

DEFAULT_URL = "http://127.0.0.1:5000/now-playing"
POLL_INTERVAL = 5.0


def _build_service(verbose: bool = False) -> NowPlayingService:
    return build_service(get_config(), verbose=verbose)


@app.command("show")
def show(
    refresh: Annotated[bool, typer.Option("--refresh", help="Bypass the now-playing cache")] = False,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show request details")] = False,
) -> None:
    """Resolve the current listening status once."""
    service = _build_service(verbose)
    try:
        snapshot = service.resolve(force_refresh=refresh)
        if snapshot is None:
            console.print("[dim]Not listening to Spotify right now.[/dim]")
            print_output(False, output)
            return
        print_output(snapshot.to_payload(), output, title="Now Playing")
    except SpotifyStatusError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        service.close()


def fetch_status(http: httpx.Client, url: str) -> Any:
    """GET the status endpoint; any failure reads as offline (None)."""
    try:
        response = http.get(url)
        return response.json()
    except (httpx.HTTPError, ValueError):
        return None


@app.command("watch")
def watch(
    url: Annotated[str, typer.Option("--url", "-u", help="Status endpoint to poll")] = DEFAULT_URL,
    interval: Annotated[float, typer.Option("--interval", "-i", min=0.5, help="Seconds between polls")] = POLL_INTERVAL,
    count: Annotated[int | None, typer.Option("--count", "-n", help="Stop after this many polls")] = None,
) -> None:
    """Poll a running status endpoint and keep a live status line on screen."""
    polls = 0
    with httpx.Client(timeout=interval) as http, Live(status_text(None), console=console, auto_refresh=False) as live:
        while True:
            live.update(status_text(fetch_status(http, url)), refresh=True)
            polls += 1
            if count is not None and polls >= count:
                break
            time.sleep(interval)
