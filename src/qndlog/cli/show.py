"""Show command — list log entries, newest first."""

import json
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from qndlog.output.formatter import format_error, format_fields
from qndlog.settings import load_settings
from qndlog.store import LogStore

console = Console()


def show(
    log: Optional[str] = typer.Option(None, "--log", "-l", help="Log file (default from .qndlog.yaml)"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Show at most N entries"),
    format: str = typer.Option("text", "--format", "-f", help="Output format: text, json"),
) -> None:
    """Show log entries, most recent first."""
    settings = load_settings()
    path = log or settings.log_path

    store = LogStore(path, chunk_size=settings.chunk_size)
    try:
        entries = store.entries(limit=limit)
    except json.JSONDecodeError as e:
        console.print(format_error(
            "ParseError",
            str(e),
            line_content=e.doc,
            suggestion="Every non-blank line of the log must be one JSON value",
        ), style="red", markup=False)
        raise typer.Exit(1)
    except OSError as e:
        console.print(format_error(type(e).__name__, str(e)), style="red", markup=False)
        raise typer.Exit(1)

    if format == "json":
        console.print(json.dumps(entries, indent=2, ensure_ascii=False), markup=False, soft_wrap=True)
        return

    if not entries:
        console.print(f"[yellow]No entries in {path}[/yellow]")
        return

    table = Table()
    table.add_column("Entry", style="cyan")
    table.add_column("Time", style="green")
    table.add_column("Fields", style="white")
    for entry in entries:
        if isinstance(entry, dict):
            table.add_row(
                str(entry.get("entry-id", "")),
                str(entry.get("time", "")),
                format_fields(entry),
            )
        else:
            table.add_row("", "", format_fields(entry))
    console.print(table)
