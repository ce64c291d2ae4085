"""Console sink — prints entries to the terminal with Rich styling.

Color scheme
------------
- bold white on red : EMERGENCY, ALERT
- bold red          : CRITICAL
- red               : ERROR
- yellow            : WARNING
- cyan              : NOTICE
- green             : INFO
- dim               : DEBUG
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.text import Text

from scopelog.config import settings
from scopelog.models.entries import LogEntry
from scopelog.routing.sinks import BaseSink
from scopelog.routing.sinks._formatting import format_scopes

LEVEL_STYLES: dict[str, str] = {
    "emergency": "bold white on red",
    "alert": "bold white on red",
    "critical": "bold red",
    "error": "red",
    "warning": "yellow",
    "notice": "cyan",
    "info": "green",
    "debug": "dim",
}


class ConsoleSink(BaseSink):
    """Prints one styled line per entry.

    Parameters
    ----------
    console:
        The Rich console to print to.  When omitted a console on stderr
        (or stdout, per ``settings.console_stderr``) is created.
    markup:
        Whether Rich markup in messages is interpreted.  Defaults to
        ``settings.console_markup``.
    show_time:
        Prefix lines with an ISO 8601 timestamp.
    """

    def __init__(
        self,
        console: Console | None = None,
        markup: bool | None = None,
        show_time: bool = True,
        **options: Any,
    ) -> None:
        super().__init__(**options)
        if console is None:
            console = Console(stderr=settings.console_stderr)
        self._console = console
        self._markup = settings.console_markup if markup is None else markup
        self._show_time = show_time

    @property
    def console(self) -> Console:
        return self._console

    def render(self, entry: LogEntry) -> Text:
        """Build the Rich ``Text`` for an entry."""
        text = Text()
        if self._show_time:
            text.append(entry.timestamp.isoformat(timespec="seconds"), style="dim")
            text.append(" ")
        text.append(entry.level.upper(), style=LEVEL_STYLES.get(entry.level, ""))
        scope_part = format_scopes(entry.scopes)
        if scope_part:
            text.append(" ")
            text.append(scope_part, style="magenta")
        text.append(": ")
        if self._markup:
            text.append_text(Text.from_markup(entry.message))
        else:
            text.append(entry.message)
        return text

    def write(self, level: str, message: str, scopes: frozenset[str]) -> None:
        entry = LogEntry(level=level, message=message, scopes=scopes)
        self._console.print(self.render(entry), soft_wrap=True)
