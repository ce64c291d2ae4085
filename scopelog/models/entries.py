"""Log entry model handed to buffering and formatting adapters."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


class LogEntry(BaseModel):
    """A single dispatched log entry, as seen by a sink.

    The dispatcher never builds these; adapters that keep or format
    entries (``MemorySink``, the line formatter) do.
    """

    model_config = ConfigDict(frozen=True)

    level: str
    message: str
    scopes: frozenset[str] = frozenset()
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
