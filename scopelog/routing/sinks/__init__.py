"""Sink capability contract for scopelog.

Every sink implements the ``Sink`` protocol: a single ``write(level,
message, scopes)`` method.  Sinks that want the dispatcher to filter for
them also implement ``FilteredSink`` (``accepted_levels`` and
``accepted_scopes``); sinks without those accessors receive every entry.

``BaseSink`` is a convenience base class that reads the ``levels`` and
``scopes`` options and implements both accessors.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any, Protocol, runtime_checkable

from scopelog.models.levels import normalize_level
from scopelog.models.sinks import as_scope_set


@runtime_checkable
class Sink(Protocol):
    """Protocol that every scopelog sink must implement."""

    def write(self, level: str, message: str, scopes: frozenset[str]) -> None:
        """Record one entry.

        Parameters
        ----------
        level:
            The normalized level name, e.g. ``"error"``.
        message:
            The message text.  Formatting is the sink's business.
        scopes:
            The scopes the entry was written with; empty when unscoped.
        """
        ...


@runtime_checkable
class FilteredSink(Sink, Protocol):
    """A sink that declares which levels and scopes it accepts.

    An empty set means "accept everything" for that dimension.
    """

    def accepted_levels(self) -> frozenset[str]:
        ...

    def accepted_scopes(self) -> frozenset[str]:
        ...


class BaseSink(ABC):
    """Base class for sinks configured with ``levels`` and ``scopes``.

    Parameters
    ----------
    levels:
        Level names or codes the sink accepts.  ``None`` or empty accepts
        every level.
    scopes:
        Scope tags the sink accepts.  ``None`` or empty accepts every
        entry, scoped or not.  A single string is a single scope.
    **options:
        Adapter-specific options, kept verbatim in ``config``.
    """

    def __init__(
        self,
        *,
        levels: Iterable[str | int] | None = None,
        scopes: str | Iterable[str] | None = None,
        **options: Any,
    ) -> None:
        if isinstance(levels, (str, int)):
            levels = [levels]
        self._levels = frozenset(normalize_level(lv) for lv in levels or ())
        self._scopes = as_scope_set(scopes)
        self._options: dict[str, Any] = dict(options)

    def accepted_levels(self) -> frozenset[str]:
        return self._levels

    def accepted_scopes(self) -> frozenset[str]:
        return self._scopes

    @property
    def config(self) -> dict[str, Any]:
        """Return the adapter-specific options this sink was built with."""
        return dict(self._options)

    @abstractmethod
    def write(self, level: str, message: str, scopes: frozenset[str]) -> None:
        """Record one entry.  See ``Sink.write``."""

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(levels={sorted(self._levels)}, "
            f"scopes={sorted(self._scopes)})"
        )
