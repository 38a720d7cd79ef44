"""Tests for rxexpect.reporting -- locations, reporters and default swapping."""

from __future__ import annotations

import contextvars
import threading

import pytest

from rxexpect.errors import ExpectationFailed
from rxexpect.events import on_completed, on_next
from rxexpect.expectation import expect
from rxexpect.reporting import (
    CollectingReporter,
    RaisingReporter,
    SourceLocation,
    capture_failures,
    get_default_reporter,
    set_default_reporter,
    use_reporter,
)


class TestSourceLocation:
    """Tests for SourceLocation."""

    def test_str(self) -> None:
        assert str(SourceLocation(file="specs.py", line=3)) == "specs.py:3"

    def test_capture_depth_zero_is_caller(self) -> None:
        location = SourceLocation.capture(0)
        assert location.file == __file__


class TestReporters:
    """Tests for the bundled reporters."""

    def test_raising_reporter(self) -> None:
        with pytest.raises(ExpectationFailed, match="specs.py:1: expected to next"):
            RaisingReporter()("expected to next", SourceLocation("specs.py", 1))

    def test_expectation_failed_is_assertion_error(self) -> None:
        assert issubclass(ExpectationFailed, AssertionError)

    def test_collecting_reporter(self) -> None:
        reporter = CollectingReporter()

        reporter("first", SourceLocation("a.py", 1))
        reporter("second", SourceLocation("b.py", 2))

        assert reporter.messages == ["first", "second"]
        assert len(reporter) == 2
        assert reporter.summary() == "a.py:1: first\nb.py:2: second"

        reporter.clear()
        assert not reporter

    def test_default_outside_pytest_is_raising(self) -> None:
        """A fresh context, as outside the pytest plugin, gets the raising reporter."""
        default = contextvars.Context().run(get_default_reporter)
        assert isinstance(default, RaisingReporter)

    def test_default_reporter_used_by_expect(self) -> None:
        with (
            use_reporter(RaisingReporter()),
            pytest.raises(ExpectationFailed, match="expected to never emit"),
        ):
            expect([on_next(0, "alpha")]).never()


class TestSwapping:
    """Tests for swapping the default reporter."""

    def test_capture_failures_restores_default(self) -> None:
        before = get_default_reporter()

        with capture_failures() as reporter:
            expect([]).complete()
            assert get_default_reporter() is reporter

        assert get_default_reporter() is before
        assert reporter.messages == ["expected to complete"]

    def test_restored_after_exception(self) -> None:
        before = get_default_reporter()

        with pytest.raises(RuntimeError), use_reporter(CollectingReporter()):
            raise RuntimeError("boom")

        assert get_default_reporter() is before

    def test_explicit_reporter_bypasses_default(self) -> None:
        explicit = CollectingReporter()

        with capture_failures() as captured:
            expect([], reporter=explicit).complete()

        assert explicit.messages == ["expected to complete"]
        assert captured.messages == []

    def test_swap_is_not_visible_to_other_threads(self) -> None:
        seen: list[object] = []

        def worker() -> None:
            seen.append(get_default_reporter())

        with capture_failures() as reporter:
            thread = threading.Thread(target=worker)
            thread.start()
            thread.join()

        assert seen[0] is not reporter
        assert isinstance(seen[0], RaisingReporter)

    def test_set_default_reporter(self) -> None:
        reporter = CollectingReporter()
        with use_reporter(get_default_reporter()):
            set_default_reporter(reporter)
            expect([on_completed(0)]).next()
            assert reporter.messages == ["expected to next"]
        assert get_default_reporter() is not reporter
