"""LogDispatcher — routes log entries to the sinks whose filters match.

The dispatcher owns three pieces of state: the configuration store
(sink name -> raw construction spec), the sink registry built from it,
and a clean/dirty flag.  Configuration changes only mark the state
dirty; sinks are constructed lazily, all at once, the next time an entry
is written or a sink is looked up.

Filtering is exact-set membership, not a severity threshold.  A sink
receives an entry when

* its accepted levels are empty or contain the entry's level, and
* its accepted scopes are empty or share at least one tag with the
  entry's scopes.

A sink that declares scopes therefore never receives unscoped entries.
Entries no sink accepts are dropped silently; ``write`` returns
``False``.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from scopelog.models.levels import Level, UnknownLevelError, level_names, normalize_level
from scopelog.models.sinks import as_scope_set
from scopelog.routing.registry import SinkConstructionError, SinkRegistry
from scopelog.routing.sinks import FilteredSink, Sink

logger = logging.getLogger(__name__)


class InvalidLevelError(ValueError):
    """Raised when ``write`` receives a level that is neither a known name nor code."""


class DispatcherState(str, Enum):
    """Whether the sink registry reflects the stored configuration."""

    CLEAN = "clean"
    DIRTY = "dirty"


def _accepts(sink: Sink, level: str, scopes: frozenset[str]) -> bool:
    """Evaluate the level and scope predicates for one sink.

    Sinks that do not implement ``FilteredSink`` accept everything.
    """
    if not isinstance(sink, FilteredSink):
        return True
    levels = frozenset(sink.accepted_levels())
    sink_scopes = frozenset(sink.accepted_scopes())

    level_matches = not levels or level in levels
    scope_matches = not sink_scopes or bool(scopes & sink_scopes)
    return level_matches and scope_matches


class LogDispatcher:
    """Facade that fans log entries out to configured sinks.

    Sinks are configured by name and constructed on first use.  Sinks are
    called in configuration order.  Exceptions raised by a sink's
    ``write`` propagate to the caller.

    Usage
    -----
    >>> log = LogDispatcher()
    >>> log.config("audit", {"class_name": "memory", "scopes": ["payment"]})
    >>> log.warning("card declined", scope="payment")
    True
    >>> log.warning("disk low")
    False
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._config: dict[str, Any] = {}
        self._registry: SinkRegistry | None = None
        self._state = DispatcherState.DIRTY
        # Name of the sink under construction while the registry is rebuilt
        self._building: str | None = None

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def config(
        self,
        key: str | Mapping[str, Any],
        spec: Any = None,
    ) -> Any:
        """Read or write sink configuration.

        * ``config(name)`` returns the stored spec for *name*, or ``None``.
        * ``config(name, spec)`` stores *spec* under *name*, replacing any
          previous entry.
        * ``config({name: spec, ...})`` stores several entries at once.

        Specs are not validated here; problems surface as
        ``SinkConstructionError`` when the sinks are next built.
        """
        if isinstance(key, Mapping):
            with self._lock:
                for name, entry in key.items():
                    self._config[name] = _copy_spec(entry)
                self._state = DispatcherState.DIRTY
            logger.debug("Configured sinks: %s", ", ".join(key))
            return None

        if spec is None:
            with self._lock:
                stored = self._config.get(key)
            return _copy_spec(stored)

        with self._lock:
            self._config[key] = _copy_spec(spec)
            self._state = DispatcherState.DIRTY
        logger.debug("Configured sink '%s'", key)
        return None

    def drop(self, name: str) -> bool:
        """Remove the configuration for *name*.  Returns ``True`` if it existed."""
        with self._lock:
            if name not in self._config:
                logger.warning("Cannot drop sink '%s': not configured", name)
                return False
            del self._config[name]
            self._state = DispatcherState.DIRTY
        logger.debug("Dropped sink '%s'", name)
        return True

    def configured(self) -> list[str]:
        """Return the configured sink names in configuration order."""
        with self._lock:
            return list(self._config)

    def reset(self) -> None:
        """Clear all configuration and discard every loaded sink."""
        with self._lock:
            self._config = {}
            self._registry = None
            self._state = DispatcherState.DIRTY
        logger.debug("Dispatcher reset")

    @property
    def state(self) -> DispatcherState:
        return self._state

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def _ensure_loaded(self) -> SinkRegistry:
        """Rebuild the registry from the configuration if it is dirty.

        The new registry replaces the old one only once every sink has
        loaded; a failure leaves the previous registry and the dirty state
        in place.  A sink that writes through this dispatcher while it is
        being constructed gets a ``SinkConstructionError``.
        """
        with self._lock:
            if self._registry is not None and self._state is DispatcherState.CLEAN:
                return self._registry

            if self._building is not None:
                raise SinkConstructionError(
                    self._building, "sink construction re-entered the dispatcher"
                )

            registry = SinkRegistry()
            try:
                for name, spec in self._config.items():
                    self._building = name
                    registry.load(name, spec)
            finally:
                self._building = None
            self._registry = registry
            self._state = DispatcherState.CLEAN
            logger.debug("Rebuilt sink registry with %d sink(s)", len(registry))
            return registry

    def engine(self, name: str) -> Sink | None:
        """Return the loaded sink *name*, or ``None`` if it is not configured."""
        return self._ensure_loaded().get(name)

    @staticmethod
    def levels() -> tuple[str, ...]:
        """Return the level names, most severe first."""
        return level_names()

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def write(
        self,
        level: int | str,
        message: str,
        scope: str | Iterable[str] | None = None,
    ) -> bool:
        """Send *message* to every sink whose level and scope filters match.

        Parameters
        ----------
        level:
            A level name (``"error"``) or numeric code (``3``).
        message:
            The message to log.
        scope:
            One scope tag, several, or ``None`` for an unscoped entry.

        Returns
        -------
        bool
            ``True`` if at least one sink received the entry.

        Raises
        ------
        InvalidLevelError
            If *level* is not in the level table.  No sink is called.
        SinkConstructionError
            If the sinks had to be rebuilt and one of them failed.
        """
        try:
            level_name = normalize_level(level)
        except UnknownLevelError as exc:
            raise InvalidLevelError(f'Invalid log level "{level}"') from exc

        scopes = as_scope_set(scope)
        registry = self._ensure_loaded()
        with self._lock:
            sinks = registry.loaded()

        logged = False
        for _name, sink in sinks:
            if _accepts(sink, level_name, scopes):
                sink.write(level_name, message, scopes)
                logged = True
        return logged

    def emergency(self, message: str, scope: str | Iterable[str] | None = None) -> bool:
        return self.write(Level.EMERGENCY.value, message, scope)

    def alert(self, message: str, scope: str | Iterable[str] | None = None) -> bool:
        return self.write(Level.ALERT.value, message, scope)

    def critical(self, message: str, scope: str | Iterable[str] | None = None) -> bool:
        return self.write(Level.CRITICAL.value, message, scope)

    def error(self, message: str, scope: str | Iterable[str] | None = None) -> bool:
        return self.write(Level.ERROR.value, message, scope)

    def warning(self, message: str, scope: str | Iterable[str] | None = None) -> bool:
        return self.write(Level.WARNING.value, message, scope)

    def notice(self, message: str, scope: str | Iterable[str] | None = None) -> bool:
        return self.write(Level.NOTICE.value, message, scope)

    def info(self, message: str, scope: str | Iterable[str] | None = None) -> bool:
        return self.write(Level.INFO.value, message, scope)

    def debug(self, message: str, scope: str | Iterable[str] | None = None) -> bool:
        return self.write(Level.DEBUG.value, message, scope)


def _copy_spec(spec: Any) -> Any:
    """Shallow-copy mapping specs so later caller mutation cannot leak in."""
    if isinstance(spec, Mapping):
        return dict(spec)
    return spec


# Module-level instance, import as `from scopelog.routing.dispatcher import log`
log = LogDispatcher()
