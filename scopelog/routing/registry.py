"""Sink registry — materializes named sinks from construction specs.

A construction spec is one of:

* a pre-built sink instance, stored as-is;
* a sink class, constructed with no arguments;
* a factory callable, invoked once with the sink name (or with no
  arguments if it takes none);
* an options mapping or ``SinkConfig`` whose ``class_name`` (alias
  ``engine``) selects a type from ``SINK_TYPES``, a dotted import path
  (``pkg.mod:Class`` or ``pkg.mod.Class``), or a class object.  All other
  options are passed to the constructor as keyword arguments.

Short type names are matched case-insensitively and the ``Sink`` suffix
is optional, so ``"File"``, ``"file"`` and ``"FileSink"`` all select
``FileSink``.
"""

from __future__ import annotations

import importlib
import inspect
import logging
from collections.abc import Callable, Iterator, Mapping
from typing import Any

from pydantic import ValidationError

from scopelog.models.sinks import SinkConfig
from scopelog.routing.sinks import Sink
from scopelog.routing.sinks.console import ConsoleSink
from scopelog.routing.sinks.file import FileSink
from scopelog.routing.sinks.memory import MemorySink

logger = logging.getLogger(__name__)


class SinkConstructionError(RuntimeError):
    """Raised when a configured sink cannot be materialized."""

    def __init__(self, sink_name: str, reason: str) -> None:
        super().__init__(f"Could not construct sink '{sink_name}': {reason}")
        self.sink_name = sink_name


class UnknownSinkTypeError(LookupError):
    """Raised when a ``class_name`` selector matches no known sink type."""


# ---------------------------------------------------------------------------
# Sink types
# ---------------------------------------------------------------------------

SINK_TYPES: dict[str, type] = {
    "console": ConsoleSink,
    "file": FileSink,
    "memory": MemorySink,
}


def register_sink_type(name: str, sink_cls: type) -> None:
    """Make *sink_cls* selectable by the short name *name*.

    Registering an existing name replaces the previous type.
    """
    key = name.lower()
    previous = SINK_TYPES.get(key)
    SINK_TYPES[key] = sink_cls
    if previous is not None and previous is not sink_cls:
        logger.info(
            "Sink type '%s' now maps to %s (was %s)",
            key, sink_cls.__qualname__, previous.__qualname__,
        )
    else:
        logger.info("Registered sink type '%s' -> %s", key, sink_cls.__qualname__)


def resolve_sink_type(selector: str | type) -> type:
    """Return the class a ``class_name`` selector refers to.

    Raises
    ------
    UnknownSinkTypeError
        If a short name is not registered or a dotted path has no such
        attribute.
    ImportError
        If a dotted path names a module that cannot be imported.
    """
    if isinstance(selector, type):
        return selector

    key = selector.strip().lower()
    if key in SINK_TYPES:
        return SINK_TYPES[key]
    if key.endswith("sink") and key[: -len("sink")] in SINK_TYPES:
        return SINK_TYPES[key[: -len("sink")]]

    if ":" in selector:
        module_name, _, attr = selector.partition(":")
    elif "." in selector:
        module_name, _, attr = selector.rpartition(".")
    else:
        raise UnknownSinkTypeError(
            f"Unknown sink type '{selector}'. "
            f"Known types: {', '.join(sorted(SINK_TYPES))}"
        )

    module = importlib.import_module(module_name)
    try:
        target = getattr(module, attr)
    except AttributeError as exc:
        raise UnknownSinkTypeError(
            f"Module '{module_name}' has no attribute '{attr}'"
        ) from exc
    if not isinstance(target, type):
        raise UnknownSinkTypeError(f"'{selector}' does not name a class")
    return target


def _call_factory(factory: Callable[..., Any], name: str) -> Any:
    """Invoke *factory* with the sink name if it accepts one argument."""
    try:
        signature = inspect.signature(factory)
    except (TypeError, ValueError):
        return factory()
    try:
        signature.bind(name)
    except TypeError:
        return factory()
    return factory(name)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

class SinkRegistry:
    """Holds named, materialized sinks in configuration order.

    Examples
    --------
    >>> registry = SinkRegistry()
    >>> sink = registry.load("audit", {"class_name": "memory", "scopes": ["audit"]})
    >>> registry.names()
    ['audit']
    >>> registry.get("audit") is sink
    True
    """

    def __init__(self) -> None:
        self._loaded: dict[str, Sink] = {}

    # -- Loading ------------------------------------------------------------

    def load(self, name: str, spec: Any) -> Sink:
        """Materialize the sink described by *spec* and store it as *name*.

        Loading a name that is already loaded returns the existing sink.

        Raises
        ------
        SinkConstructionError
            If the spec is unsupported, its type cannot be resolved, the
            constructor or factory raises, or the result is not a sink.
        """
        existing = self._loaded.get(name)
        if existing is not None:
            return existing

        sink = self._materialize(name, spec)
        if not isinstance(sink, Sink):
            raise SinkConstructionError(
                name, f"{type(sink).__name__} does not provide write()"
            )
        self._loaded[name] = sink
        logger.debug("Loaded sink '%s' (%s)", name, type(sink).__name__)
        return sink

    def _materialize(self, name: str, spec: Any) -> Any:
        if isinstance(spec, Mapping):
            try:
                spec = SinkConfig.model_validate(dict(spec))
            except ValidationError as exc:
                raise SinkConstructionError(name, str(exc)) from exc

        if isinstance(spec, SinkConfig):
            try:
                sink_cls = resolve_sink_type(spec.class_name)
            except (LookupError, ImportError) as exc:
                raise SinkConstructionError(name, str(exc)) from exc
            return self._construct(name, sink_cls, spec.constructor_options())

        if isinstance(spec, type):
            return self._construct(name, spec, {})

        if isinstance(spec, Sink):
            return spec

        if callable(spec):
            try:
                return _call_factory(spec, name)
            except Exception as exc:
                raise SinkConstructionError(name, f"factory raised {exc!r}") from exc

        raise SinkConstructionError(
            name, f"unsupported construction spec of type {type(spec).__name__}"
        )

    @staticmethod
    def _construct(name: str, sink_cls: type, options: dict[str, Any]) -> Any:
        try:
            return sink_cls(**options)
        except Exception as exc:
            raise SinkConstructionError(
                name, f"{sink_cls.__qualname__}(**{sorted(options)}) raised {exc!r}"
            ) from exc

    # -- Lookup -------------------------------------------------------------

    def get(self, name: str) -> Sink | None:
        """Return the sink loaded as *name*, or ``None``."""
        return self._loaded.get(name)

    def names(self) -> list[str]:
        """Return loaded sink names in load order."""
        return list(self._loaded)

    def loaded(self) -> list[tuple[str, Sink]]:
        """Return a snapshot of ``(name, sink)`` pairs in load order."""
        return list(self._loaded.items())

    def unload(self, name: str) -> bool:
        """Remove *name*.  Returns ``True`` if it was loaded."""
        return self._loaded.pop(name, None) is not None

    def reset(self) -> None:
        """Discard every loaded sink."""
        self._loaded.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._loaded

    def __len__(self) -> int:
        return len(self._loaded)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._loaded))
