"""Shared formatting helpers for the bundled sinks.

Keeps the console and file sinks producing the same line shape:
``2026-10-17T09:30:00+00:00 ERROR [payment,order]: message``.
"""

from __future__ import annotations

from datetime import datetime

from scopelog.models.entries import LogEntry


def format_scopes(scopes: frozenset[str]) -> str:
    """Render a scope set as a sorted, bracketed list; empty for no scopes.

    Examples
    --------
    >>> format_scopes(frozenset({"order", "payment"}))
    '[order,payment]'
    >>> format_scopes(frozenset())
    ''
    """
    if not scopes:
        return ""
    return "[" + ",".join(sorted(scopes)) + "]"


def format_line(entry: LogEntry, timestamp_format: str | None = None) -> str:
    """Format an entry as a single log line (no trailing newline)."""
    stamp = _format_timestamp(entry.timestamp, timestamp_format)
    scope_part = format_scopes(entry.scopes)
    head = f"{stamp} {entry.level.upper()}"
    if scope_part:
        head = f"{head} {scope_part}"
    return f"{head}: {entry.message}"


def _format_timestamp(timestamp: datetime, fmt: str | None) -> str:
    if fmt:
        return timestamp.strftime(fmt)
    return timestamp.isoformat(timespec="seconds")
