"""CLI command for running the status web server."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from spotify_status.config import get_config
from spotify_status.services.now_playing import build_service
from spotify_status.web import create_app

console = Console(stderr=True)


def serve(
    host: Annotated[str | None, typer.Option("--host", help="Bind address (default from SPOTIFY_STATUS_HOST)")] = None,
    port: Annotated[int | None, typer.Option("--port", "-p", help="Port (default from SPOTIFY_STATUS_PORT)")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show request details")] = False,
) -> None:
    """Run the Flask server exposing GET /now-playing."""
    config = get_config()
    service = build_service(config, verbose=verbose)
    flask_app = create_app(service)

    bind_host = host or config.settings.host
    bind_port = port or config.settings.port
    console.print(f"Serving now-playing on [bold]http://{bind_host}:{bind_port}/now-playing[/bold]")
    try:
        flask_app.run(host=bind_host, port=bind_port, threaded=True)
    finally:
        service.close()
