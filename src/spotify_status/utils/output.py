"""Output formatting utilities for CLI output."""

from __future__ import annotations

import json
import sys
from enum import Enum
from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

console = Console(stderr=True)

OFFLINE_MESSAGE = "Sorry, not listening to Spotify right now. Check again later."
PLAYING_STYLE = "bold #25d865"
IDLE_STYLE = "#a3a3a3"


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"


def print_output(
    data: dict[str, Any] | bool,
    fmt: OutputFormat = OutputFormat.TABLE,
    title: str | None = None,
) -> None:
    """Print data in the requested format.

    Args:
        data: A single record, or False for "nothing to show".
        fmt: Output format (table, json).
        title: Optional title for table output.
    """
    if fmt == OutputFormat.JSON:
        print_json(data)
    else:
        print_table(data, title)


def print_json(data: Any) -> None:
    """Print data as formatted JSON to stdout."""
    json.dump(data, sys.stdout, indent=2, default=str)
    sys.stdout.write("\n")


def print_table(data: dict[str, Any] | bool, title: str | None = None) -> None:
    """Print a single record as a two-column Rich table."""
    if not data:
        console.print("[dim]No results.[/dim]")
        return

    table = Table(title=title, show_lines=False)
    table.add_column("field")
    table.add_column("value", overflow="fold")
    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)


def format_status_line(payload: Any) -> str:
    """Render a /now-playing payload the way the status widget does."""
    if not isinstance(payload, dict) or "error" in payload:
        return OFFLINE_MESSAGE

    title = payload.get("title")
    artist = payload.get("artist")
    if not title or not artist:
        return OFFLINE_MESSAGE

    if payload.get("isPlaying"):
        return f"{title} by {artist}"
    return f"Paused: {title} by {artist}"


def status_text(payload: Any) -> Text:
    """Styled status line: green while playing, grey otherwise."""
    playing = isinstance(payload, dict) and bool(payload.get("isPlaying")) and "error" not in payload
    return Text(f"♫ {format_status_line(payload)}", style=PLAYING_STYLE if playing else IDLE_STYLE)
