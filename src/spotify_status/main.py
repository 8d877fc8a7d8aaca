"""spotify-status CLI — entry point.

Shows the current Spotify listening status in the terminal or serves it as
JSON for a web page.
"""

from __future__ import annotations

import logging

import typer

from spotify_status.commands.auth_cmd import app as auth_app
from spotify_status.commands.now_playing_cmd import app as now_playing_app
from spotify_status.commands.serve_cmd import serve

app = typer.Typer(
    name="spotify-status",
    help="Show what you are listening to on Spotify, in the terminal or on a web page.",
    no_args_is_help=True,
)

# Register command groups
app.add_typer(auth_app, name="auth")
app.add_typer(now_playing_app, name="now-playing")
app.command("serve")(serve)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """spotify-status — resolve, watch and serve your listening status."""
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


if __name__ == "__main__":
    app()
