"""Adversarial tests — dispatcher behavior under hostile input and failure.

These tests verify that:
1. Malformed levels never reach a sink
2. Sink write failures propagate instead of being swallowed
3. A broken sink configuration never yields a partial registry
4. Odd scope values are matched literally
5. Concurrent writers trigger exactly one rebuild
"""

from __future__ import annotations

import threading

import pytest

from scopelog.routing.dispatcher import DispatcherState, InvalidLevelError, LogDispatcher
from scopelog.routing.registry import SinkConstructionError
from scopelog.routing.sinks.memory import MemorySink

# ---------------------------------------------------------------------------
# Test sinks
# ---------------------------------------------------------------------------


class GoodSink:
    """A sink that always succeeds."""

    def __init__(self) -> None:
        self.received: list[str] = []

    def write(self, level: str, message: str, scopes: frozenset[str]) -> None:
        self.received.append(message)


class ExplodingSink:
    """A sink whose write always throws."""

    def __init__(self, exc_type: type = RuntimeError) -> None:
        self._exc_type = exc_type

    def write(self, level: str, message: str, scopes: frozenset[str]) -> None:
        raise self._exc_type("sink exploded!")


class BrokenFilterSink:
    """A sink whose accepted_levels accessor raises."""

    def accepted_levels(self) -> frozenset[str]:
        raise RuntimeError("filter exploded")

    def accepted_scopes(self) -> frozenset[str]:
        return frozenset()

    def write(self, level: str, message: str, scopes: frozenset[str]) -> None:
        pass


# ---------------------------------------------------------------------------
# Test: hostile levels
# ---------------------------------------------------------------------------


class TestHostileLevels:
    @pytest.mark.parametrize(
        "level",
        [
            "Error",
            " error",
            "error ",
            "err",
            "emergency\x00",
            "8",
            8,
            -3,
            10**9,
            3.0,
            b"error",
            ["error"],
            {"level": "error"},
            object(),
            False,
        ],
    )
    def test_malformed_level_rejected(self, level):
        dispatcher = LogDispatcher()
        sink = GoodSink()
        dispatcher.config("good", sink)

        with pytest.raises(InvalidLevelError):
            dispatcher.write(level, "payload")

        assert sink.received == []


# ---------------------------------------------------------------------------
# Test: sink failures
# ---------------------------------------------------------------------------


class TestSinkFailures:
    @pytest.mark.parametrize("exc_type", [RuntimeError, OSError, ValueError, KeyError])
    def test_write_exception_propagates_unchanged(self, exc_type):
        dispatcher = LogDispatcher()
        dispatcher.config("boom", ExplodingSink(exc_type))
        with pytest.raises(exc_type):
            dispatcher.error("x")

    def test_failure_stops_later_sinks_for_that_entry(self):
        dispatcher = LogDispatcher()
        before = GoodSink()
        after = GoodSink()
        dispatcher.config("before", before)
        dispatcher.config("boom", ExplodingSink())
        dispatcher.config("after", after)

        with pytest.raises(RuntimeError):
            dispatcher.info("x")

        assert before.received == ["x"]
        assert after.received == []

    def test_filter_accessor_exception_propagates(self):
        dispatcher = LogDispatcher()
        dispatcher.config("broken", BrokenFilterSink())
        with pytest.raises(RuntimeError, match="filter exploded"):
            dispatcher.info("x")

    def test_dispatcher_usable_after_sink_failure(self):
        dispatcher = LogDispatcher()
        dispatcher.config("boom", ExplodingSink())
        with pytest.raises(RuntimeError):
            dispatcher.info("x")
        dispatcher.drop("boom")
        dispatcher.config("good", GoodSink())
        assert dispatcher.info("y") is True


# ---------------------------------------------------------------------------
# Test: broken configuration
# ---------------------------------------------------------------------------


class TestBrokenConfiguration:
    def test_no_partial_registry(self):
        """A failure in the last sink must not leave the first ones loaded."""
        dispatcher = LogDispatcher()
        calls: list[str] = []

        def first():
            calls.append("first")
            return GoodSink()

        dispatcher.config({"first": first, "second": {"class_name": "does-not-exist"}})

        with pytest.raises(SinkConstructionError) as info:
            dispatcher.info("x")

        assert info.value.sink_name == "second"
        assert calls == ["first"]
        assert dispatcher.state is DispatcherState.DIRTY

    def test_every_write_retries_a_broken_rebuild(self):
        dispatcher = LogDispatcher()
        attempts: list[int] = []

        def flaky():
            attempts.append(1)
            if len(attempts) < 3:
                raise OSError("not yet")
            return MemorySink()

        dispatcher.config("flaky", flaky)
        for _ in range(2):
            with pytest.raises(SinkConstructionError):
                dispatcher.info("x")
        assert dispatcher.info("x") is True
        assert len(attempts) == 3

    def test_factory_logging_through_its_own_dispatcher(self):
        """A sink that logs while being built fails once instead of recursing."""
        dispatcher = LogDispatcher()
        calls: list[int] = []

        def factory():
            calls.append(1)
            dispatcher.info("building")
            return MemorySink()

        dispatcher.config("a", factory)

        with pytest.raises(SinkConstructionError, match="re-entered the dispatcher") as info:
            dispatcher.info("x")

        assert info.value.sink_name == "a"
        assert len(calls) == 1
        assert len(str(info.value)) < 1_000
        assert dispatcher.state is DispatcherState.DIRTY

    def test_constructor_logging_through_its_own_dispatcher(self):
        dispatcher = LogDispatcher()

        class ChattySink(MemorySink):
            def __init__(self, **options):
                dispatcher.warning("constructing")
                super().__init__(**options)

        dispatcher.config("chatty", {"class_name": ChattySink})
        with pytest.raises(SinkConstructionError, match="re-entered the dispatcher"):
            dispatcher.engine("chatty")

    def test_dispatcher_recovers_after_reentrant_build(self):
        dispatcher = LogDispatcher()

        def factory():
            dispatcher.info("building")
            return MemorySink()

        dispatcher.config("a", factory)
        with pytest.raises(SinkConstructionError):
            dispatcher.info("x")

        dispatcher.config("a", MemorySink)
        assert dispatcher.info("y") is True
        assert dispatcher.engine("a").messages == ["y"]

    def test_invalid_level_in_sink_options(self):
        dispatcher = LogDispatcher()
        dispatcher.config("bad", {"class_name": "memory", "levels": ["error", "panic"]})
        with pytest.raises(SinkConstructionError, match="panic"):
            dispatcher.engine("bad")


# ---------------------------------------------------------------------------
# Test: odd scopes
# ---------------------------------------------------------------------------


class TestOddScopes:
    @pytest.mark.parametrize(
        "scope",
        ["", " ", "pay ment", "paiement-€", "a" * 10_000, "payment\n"],
    )
    def test_scope_matched_literally(self, scope: str):
        dispatcher = LogDispatcher()
        exact = MemorySink(scopes=[scope])
        other = MemorySink(scopes=["payment"])
        dispatcher.config({"exact": exact, "other": other})

        assert dispatcher.info("m", scope) is True
        assert exact.pending_count == 1
        assert other.pending_count == 0

    def test_large_scope_set(self):
        dispatcher = LogDispatcher()
        sink = MemorySink(scopes=["needle"])
        dispatcher.config("s", sink)
        haystack = [f"scope-{i}" for i in range(5_000)]
        assert dispatcher.info("m", haystack) is False
        assert dispatcher.info("m", haystack + ["needle"]) is True

    def test_generator_scope(self):
        dispatcher = LogDispatcher()
        sink = MemorySink(scopes=["b"])
        dispatcher.config("s", sink)
        assert dispatcher.info("m", (s for s in ["a", "b"])) is True

    def test_empty_scope_list_is_unscoped(self):
        dispatcher = LogDispatcher()
        sink = MemorySink(scopes=["payment"])
        dispatcher.config("s", sink)
        assert dispatcher.info("m", []) is False


# ---------------------------------------------------------------------------
# Test: concurrency
# ---------------------------------------------------------------------------


class TestConcurrentDispatch:
    def test_concurrent_writers_rebuild_once(self):
        dispatcher = LogDispatcher()
        calls: list[int] = []
        lock = threading.Lock()

        def factory():
            with lock:
                calls.append(1)
            return MemorySink()

        dispatcher.config("mem", factory)
        barrier = threading.Barrier(8)
        results: list[bool] = []

        def worker() -> None:
            barrier.wait()
            for _ in range(50):
                ok = dispatcher.info("x")
                with lock:
                    results.append(ok)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(calls) == 1
        assert len(results) == 400
        assert all(results)
        assert dispatcher.engine("mem").pending_count == 400
