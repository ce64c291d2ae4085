"""Main Typer application for the ``scopelog`` command.

Entry point: ``scopelog`` (configured via pyproject.toml console_scripts).

Commands: levels, emit.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from scopelog.config import settings
from scopelog.models.levels import LEVELS
from scopelog.routing.dispatcher import InvalidLevelError, LogDispatcher
from scopelog.routing.registry import SinkConstructionError

app = typer.Typer(
    name="scopelog",
    help="scopelog: route leveled, scoped log entries to filtered sinks.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

console = Console()


@app.callback()
def main_callback() -> None:
    """Configure scopelog's own diagnostics from settings."""
    logging.basicConfig(level=settings.log_level)


@app.command(name="levels", help="List the RFC 5424 levels and their codes.")
def levels_cmd() -> None:
    """Print the level table."""
    table = Table(title="Log Levels")
    table.add_column("Code", justify="right", style="cyan")
    table.add_column("Name", style="green")
    for code, name in LEVELS.items():
        table.add_row(str(code), name)
    console.print(table)


@app.command(name="emit", help="Write one entry through a console (and optional file) sink.")
def emit_cmd(
    level: str = typer.Argument(..., help="Level name or numeric code."),
    message: str = typer.Argument(..., help="Message to log."),
    scope: Optional[list[str]] = typer.Option(
        None, "--scope", "-s", help="Scope tag for the entry (repeatable)."
    ),
    levels: Optional[list[str]] = typer.Option(
        None, "--levels", "-l", help="Levels the sinks accept (repeatable)."
    ),
    sink_scopes: Optional[list[str]] = typer.Option(
        None, "--sink-scopes", help="Scopes the sinks accept (repeatable)."
    ),
    file: Optional[Path] = typer.Option(
        None, "--file", "-f", help="Also append the entry to this file."
    ),
) -> None:
    """Emit an entry and report whether any sink handled it.

    Exit codes: 0 handled, 1 dropped by every sink, 2 invalid level or sink.
    """
    filters: dict[str, Any] = {}
    if levels:
        filters["levels"] = levels
    if sink_scopes:
        filters["scopes"] = sink_scopes

    dispatcher = LogDispatcher()
    dispatcher.config("console", {"class_name": "console", "console": console, **filters})
    if file is not None:
        dispatcher.config(
            "file",
            {"class_name": "file", "path": file.parent, "file": file.name, **filters},
        )

    parsed_level: int | str = int(level) if level.lstrip("-").isdigit() else level
    try:
        handled = dispatcher.write(parsed_level, message, scope or None)
    except (InvalidLevelError, SinkConstructionError) as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=2)

    if not handled:
        console.print("[dim]No sink accepted the entry; dropped.[/dim]")
        raise typer.Exit(code=1)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
