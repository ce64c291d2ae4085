"""scopelog data models — level table, log entries, sink configuration."""

from scopelog.models.entries import LogEntry
from scopelog.models.levels import (
    LEVEL_MAP,
    LEVELS,
    Level,
    UnknownLevelError,
    code_of,
    is_valid_name,
    level_names,
    name_of,
    normalize_level,
)
from scopelog.models.sinks import SinkConfig, as_scope_set

__all__ = [
    # levels
    "Level",
    "LEVELS",
    "LEVEL_MAP",
    "UnknownLevelError",
    "code_of",
    "name_of",
    "is_valid_name",
    "level_names",
    "normalize_level",
    # entries
    "LogEntry",
    # sinks
    "SinkConfig",
    "as_scope_set",
]
