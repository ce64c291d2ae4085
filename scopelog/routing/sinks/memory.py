"""In-memory sink — buffers entries for later retrieval.

Useful in tests and for handing entries to a transport layer that
drains the buffer itself.  The sink never sends anything.
"""

from __future__ import annotations

import logging
from typing import Any

from scopelog.models.entries import LogEntry
from scopelog.routing.sinks import BaseSink

logger = logging.getLogger(__name__)


class MemorySink(BaseSink):
    """Keeps every accepted entry in a pending buffer.

    Parameters
    ----------
    max_entries:
        Optional cap on the buffer.  When full, the oldest entry is
        discarded.  ``None`` keeps everything.
    """

    def __init__(self, max_entries: int | None = None, **options: Any) -> None:
        super().__init__(**options)
        self._max_entries = max_entries
        self._pending: list[LogEntry] = []

    def write(self, level: str, message: str, scopes: frozenset[str]) -> None:
        """Append an entry to the pending buffer."""
        self._pending.append(LogEntry(level=level, message=message, scopes=scopes))
        if self._max_entries is not None and len(self._pending) > self._max_entries:
            del self._pending[0]
        logger.debug("MemorySink: buffered %s entry", level)

    def flush(self) -> list[LogEntry]:
        """Return and clear all pending entries."""
        entries = list(self._pending)
        self._pending.clear()
        return entries

    @property
    def entries(self) -> list[LogEntry]:
        """Return a copy of the pending entries without clearing them."""
        return list(self._pending)

    @property
    def pending_count(self) -> int:
        """Return the number of pending entries."""
        return len(self._pending)

    @property
    def messages(self) -> list[str]:
        return [entry.message for entry in self._pending]
