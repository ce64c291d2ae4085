"""File sink — appends formatted entries to local log files.

Layout: with ``file`` set, every entry goes to ``{path}/{file}``.
Without it, error-class levels (emergency, alert, critical, error,
warning) go to ``{path}/error.log`` and everything else to
``{path}/debug.log``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from scopelog.config import settings
from scopelog.models.entries import LogEntry
from scopelog.routing.sinks import BaseSink
from scopelog.routing.sinks._formatting import format_line

logger = logging.getLogger(__name__)

ERROR_LEVELS: frozenset[str] = frozenset(
    {"emergency", "alert", "critical", "error", "warning"}
)


class FileSink(BaseSink):
    """Writes entries to plain-text log files.

    Parameters
    ----------
    path:
        Directory for log files.  Defaults to ``settings.log_path``.
    file:
        Single file name for all entries.  When omitted entries are split
        into ``error.log`` and ``debug.log`` by level.
    timestamp_format:
        Optional ``strftime`` format; ISO 8601 when omitted.
    """

    def __init__(
        self,
        path: Path | str | None = None,
        file: str | None = None,
        timestamp_format: str | None = None,
        **options: Any,
    ) -> None:
        super().__init__(**options)
        self._base = Path(path) if path else settings.log_path
        self._file = file
        self._timestamp_format = timestamp_format
        self._base.mkdir(parents=True, exist_ok=True)

    @property
    def base_path(self) -> Path:
        return self._base

    def target_for(self, level: str) -> Path:
        """Return the file an entry at *level* is appended to."""
        if self._file:
            return self._base / self._file
        name = "error.log" if level in ERROR_LEVELS else "debug.log"
        return self._base / name

    def write(self, level: str, message: str, scopes: frozenset[str]) -> None:
        entry = LogEntry(level=level, message=message, scopes=scopes)
        target = self.target_for(level)
        line = format_line(entry, self._timestamp_format)
        with target.open("a", encoding="utf-8") as fh:
            fh.write(line + "\n")
        logger.debug("FileSink: appended %s entry to %s", level, target)

    def read_lines(self, level: str = "debug") -> list[str]:
        """Read back the lines in the file *level* entries go to."""
        target = self.target_for(level)
        if not target.exists():
            return []
        return target.read_text(encoding="utf-8").splitlines()
