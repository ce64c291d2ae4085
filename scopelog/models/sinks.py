"""Sink configuration model — the options form of a construction spec.

A sink can be configured from an instance, a factory, a class, or an
options mapping.  The mapping form is validated through ``SinkConfig``:
``class_name`` (or its alias ``engine``) selects the adapter type,
``levels`` and ``scopes`` are the recognized filter keys, and every
other key is passed through to the adapter's constructor untouched.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from scopelog.models.levels import normalize_level

_SELECTOR_KEYS = ("class_name", "className", "engine")


def as_scope_set(scope: str | Iterable[str] | None) -> frozenset[str]:
    """Coerce a caller-supplied scope argument into a set of tags.

    A bare string is one scope, ``None`` is no scope.

    Examples
    --------
    >>> sorted(as_scope_set("payment"))
    ['payment']
    >>> as_scope_set(None)
    frozenset()
    """
    if scope is None:
        return frozenset()
    if isinstance(scope, str):
        return frozenset((scope,))
    return frozenset(scope)


class SinkConfig(BaseModel):
    """Options-style construction spec for one sink.

    Examples
    --------
    >>> cfg = SinkConfig(engine="file", levels=["error", 2], path="/tmp/logs")
    >>> cfg.class_name
    'file'
    >>> cfg.levels
    ('error', 'critical')
    >>> cfg.constructor_options()
    {'levels': ('error', 'critical'), 'path': '/tmp/logs'}
    """

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        arbitrary_types_allowed=True,
    )

    class_name: str | type = Field(
        validation_alias=AliasChoices(*_SELECTOR_KEYS),
    )
    levels: tuple[str, ...] | None = None
    scopes: tuple[str, ...] | None = None

    @model_validator(mode="before")
    @classmethod
    def _single_selector(cls, data: Any) -> Any:
        # Unused selector aliases would otherwise land in model_extra.
        if isinstance(data, dict):
            given = [key for key in _SELECTOR_KEYS if key in data]
            if len(given) > 1:
                raise ValueError(
                    f"give only one of {', '.join(_SELECTOR_KEYS)}; got {', '.join(given)}"
                )
        return data

    @field_validator("levels", mode="before")
    @classmethod
    def _normalize_levels(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, (str, int)):
            value = [value]
        # UnknownLevelError is a LookupError, not a ValueError; re-raise as
        # ValueError so pydantic reports it as a validation error.
        try:
            return tuple(normalize_level(item) for item in value)
        except LookupError as exc:
            raise ValueError(str(exc)) from exc

    @field_validator("scopes", mode="before")
    @classmethod
    def _normalize_scopes(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, str):
            return (value,)
        return tuple(value)

    def constructor_options(self) -> dict[str, Any]:
        """Return the keyword arguments for the adapter constructor.

        Only filter keys that were actually given are included, so adapters
        that know nothing about ``levels``/``scopes`` still construct.
        """
        options: dict[str, Any] = {}
        if self.levels is not None:
            options["levels"] = self.levels
        if self.scopes is not None:
            options["scopes"] = self.scopes
        options.update(self.model_extra or {})
        return options
