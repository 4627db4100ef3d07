"""Add command — write one entry to the log."""

import json
from typing import Optional

import typer
from rich.console import Console

from qndlog.entry import Entry
from qndlog.output.formatter import format_error, parse_field
from qndlog.settings import load_settings

console = Console()


def add(
    fields: list[str] = typer.Argument(None, help="Fields as key=value (values parsed as JSON when possible)"),
    log: Optional[str] = typer.Option(None, "--log", "-l", help="Log file (default from .qndlog.yaml)"),
    format: str = typer.Option("text", "--format", "-f", help="Output format: text, json"),
) -> None:
    """Append a new entry to the log."""
    path = log or load_settings().log_path

    try:
        parsed = dict(parse_field(field) for field in fields or [])
    except ValueError as e:
        console.print(format_error('ValueError', str(e)), style="red", markup=False)
        raise typer.Exit(1)

    entry = Entry(path, parsed)
    entry.cancel()
    try:
        entry.save()
    except (OSError, ValueError) as e:
        console.print(format_error(type(e).__name__, str(e)), style="red", markup=False)
        raise typer.Exit(1)

    if format == "json":
        console.print(json.dumps(entry, ensure_ascii=False), markup=False, soft_wrap=True)
    else:
        console.print(f"[green]Saved[/green] {entry['entry-id']} to {path}")
