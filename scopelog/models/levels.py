"""RFC 5424 severity table — the closed set of levels scopelog understands.

The table is fixed: eight named severities paired with their syslog codes.
There are no custom levels.  Lookups outside the table raise
``UnknownLevelError``.
"""

from __future__ import annotations

from enum import IntEnum
from types import MappingProxyType
from typing import Any


class UnknownLevelError(LookupError):
    """Raised when a name or code is not part of the level table."""


class Level(IntEnum):
    """Severities as detailed in RFC 5424, most severe first."""

    EMERGENCY = 0
    ALERT = 1
    CRITICAL = 2
    ERROR = 3
    WARNING = 4
    NOTICE = 5
    INFO = 6
    DEBUG = 7

    @property
    def label(self) -> str:
        """Return the lowercase level name used for routing."""
        return self.name.lower()


# code -> name
LEVELS: MappingProxyType[int, str] = MappingProxyType(
    {member.value: member.label for member in Level}
)

# name -> code
LEVEL_MAP: MappingProxyType[str, int] = MappingProxyType(
    {member.label: member.value for member in Level}
)


def name_of(code: int) -> str:
    """Return the level name for a numeric *code*.

    Examples
    --------
    >>> name_of(3)
    'error'
    """
    try:
        return LEVELS[code]
    except (KeyError, TypeError) as exc:
        raise UnknownLevelError(
            f"No level with code {code!r}. "
            f"Valid codes: {', '.join(f'{c}={n}' for c, n in LEVELS.items())}"
        ) from exc


def code_of(name: str) -> int:
    """Return the numeric code for a level *name*.

    Examples
    --------
    >>> code_of("warning")
    4
    """
    try:
        return LEVEL_MAP[name]
    except (KeyError, TypeError) as exc:
        raise UnknownLevelError(
            f"Unknown level {name!r}. Valid levels: {', '.join(LEVEL_MAP)}"
        ) from exc


def is_valid_name(name: Any) -> bool:
    """Whether *name* is one of the eight level names (exact match)."""
    return isinstance(name, str) and name in LEVEL_MAP


def level_names() -> tuple[str, ...]:
    """Return every level name, most severe first."""
    return tuple(LEVEL_MAP)


def normalize_level(value: int | str | Level) -> str:
    """Translate a name, numeric code or ``Level`` member into the level name.

    Names are matched exactly; ``"ERROR"`` is not ``"error"``.  Booleans
    are rejected even though they are ints.

    Raises
    ------
    UnknownLevelError
        If *value* is not in the table.
    """
    if isinstance(value, bool):
        raise UnknownLevelError(f"Booleans are not log levels: {value!r}")
    if isinstance(value, int):
        return name_of(int(value))
    if is_valid_name(value):
        return value
    raise UnknownLevelError(
        f"Unknown level {value!r}. Valid levels: {', '.join(LEVEL_MAP)}"
    )
