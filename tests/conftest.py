"""Shared test fixtures for scopelog."""

from __future__ import annotations

import io
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console

from scopelog.routing.dispatcher import LogDispatcher


class RecordingSink:
    """A filtered sink that records every write it receives."""

    def __init__(
        self,
        levels: set[str] | None = None,
        scopes: set[str] | None = None,
    ) -> None:
        self._levels = frozenset(levels or ())
        self._scopes = frozenset(scopes or ())
        self.received: list[tuple[str, str, frozenset[str]]] = []

    def accepted_levels(self) -> frozenset[str]:
        return self._levels

    def accepted_scopes(self) -> frozenset[str]:
        return self._scopes

    def write(self, level: str, message: str, scopes: frozenset[str]) -> None:
        self.received.append((level, message, scopes))

    @property
    def messages(self) -> list[str]:
        return [message for _, message, _ in self.received]


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for log files."""
    return tmp_path


@pytest.fixture
def dispatcher() -> LogDispatcher:
    """Provide a fresh, unconfigured LogDispatcher."""
    return LogDispatcher()


@pytest.fixture
def make_recording_sink() -> Callable[..., RecordingSink]:
    """Factory fixture: build a RecordingSink with optional filters."""

    def _factory(**filters: Any) -> RecordingSink:
        return RecordingSink(**filters)

    return _factory


@pytest.fixture
def console_buffer() -> tuple[Console, io.StringIO]:
    """Provide a wide, colorless Rich console writing to a StringIO."""
    buffer = io.StringIO()
    console = Console(file=buffer, width=200, color_system=None, force_terminal=False)
    return console, buffer
