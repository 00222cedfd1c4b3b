"""Rich display functions for the fetchero CLI."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table

if TYPE_CHECKING:
    from rich.console import Console

MAX_MESSAGE_DISPLAY = 200


def _format_message(message: Any) -> str:
    if isinstance(message, str):
        text = message
    else:
        text = json.dumps(message, default=str)
    if len(text) > MAX_MESSAGE_DISPLAY:
        return text[: MAX_MESSAGE_DISPLAY - 3] + "..."
    return text


def display_errors(errors: list[dict[str, Any]], console: Console) -> None:
    """Display normalized errors as a table."""
    table = Table(title="Errors", show_header=True, header_style="bold red")
    table.add_column("#", style="dim", width=3)
    table.add_column("Code", style="yellow", no_wrap=True)
    table.add_column("Message", style="white")

    for i, error in enumerate(errors, 1):
        extensions = error.get("extensions") or {}
        table.add_row(str(i), str(extensions.get("code", "")), _format_message(extensions.get("message", "")))

    console.print()
    console.print(table)


def display_envelope(envelope: Any, console: Console, json_output: bool = False) -> None:
    """Print an envelope's data as JSON and its errors as a table."""
    if json_output or not isinstance(envelope, dict):
        console.print_json(data=envelope, default=str)
        return

    data = envelope.get("data")
    if data is None:
        console.print("[dim]No data returned.[/dim]")
    else:
        console.print_json(data=data, default=str)

    errors = envelope.get("errors")
    if errors:
        display_errors(errors, console)
