"""Tests for rxexpect.events -- recorded events, validation and conversion."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import pytest

from rxexpect.errors import InvalidEventLogError
from rxexpect.events import (
    EventKind,
    RecordedEvent,
    format_events,
    from_recorded,
    on_completed,
    on_error,
    on_next,
    validate_log,
)


# ---------------------------------------------------------------------------
# Stand-ins for a scheduler's Recorded[Notification] objects
# ---------------------------------------------------------------------------

@dataclass
class _Notification:
    kind: str
    value: object = None
    exception: object = None


@dataclass
class _Recorded:
    time: int
    value: _Notification


class _Unprintable:
    def __str__(self) -> str:
        raise RuntimeError("cannot render")


class TestRecordedEvent:
    """Tests for RecordedEvent and its constructors."""

    def test_on_next(self) -> None:
        event = on_next(10, "alpha")

        assert event.kind is EventKind.NEXT
        assert event.is_next and not event.is_terminal
        assert event.element == "alpha"
        assert event.error is None

    def test_on_error(self) -> None:
        err = RuntimeError("boom")
        event = on_error(20, err)

        assert event.is_error and event.is_terminal
        assert event.error is err
        assert event.element is None

    def test_on_completed(self) -> None:
        event = on_completed(30)

        assert event.is_completed and event.is_terminal
        assert event.value is None

    def test_events_compare_by_value(self) -> None:
        assert on_next(10, "alpha") == on_next(10, "alpha")
        assert on_next(10, "alpha") != on_next(20, "alpha")

    def test_negative_time_rejected(self) -> None:
        with pytest.raises(InvalidEventLogError, match="non-negative"):
            on_next(-1, "alpha")

    def test_frozen(self) -> None:
        event = on_completed(0)
        with pytest.raises(AttributeError):
            event.time = 5  # type: ignore[misc]

    def test_format_events(self) -> None:
        log = [on_next(10, "alpha"), on_error(20, "bad"), on_completed(30)]
        assert format_events(log) == "[next(10, alpha), error(20, bad), completed(30)]"


class TestValidateLog:
    """Tests for validate_log()."""

    def test_valid_log(self) -> None:
        validate_log([on_next(0, "a"), on_next(0, "b"), on_next(5, "c"), on_completed(5)])

    def test_empty_log_is_valid(self) -> None:
        validate_log([])

    def test_decreasing_time_rejected(self) -> None:
        with pytest.raises(InvalidEventLogError, match="precedes"):
            validate_log([on_next(10, "a"), on_next(5, "b")])

    def test_event_after_terminal_rejected(self) -> None:
        with pytest.raises(InvalidEventLogError, match="follows terminal"):
            validate_log([on_completed(5), on_next(5, "a")])

    def test_invalid_log_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            validate_log([on_error(5, "x"), on_completed(6)])


class TestFromRecorded:
    """Tests for from_recorded()."""

    def test_notification_objects(self) -> None:
        err = RuntimeError("boom")
        messages = [
            _Recorded(10, _Notification("N", value="alpha")),
            _Recorded(20, _Notification("E", exception=err)),
        ]

        events = from_recorded(messages)

        assert events == [on_next(10, "alpha"), on_error(20, err)]

    def test_completed_notification(self) -> None:
        assert from_recorded([_Recorded(5, _Notification("C"))]) == [on_completed(5)]

    def test_tuples(self) -> None:
        events = from_recorded([(10, "next", "alpha"), (10, EventKind.COMPLETED, "ignored")])

        assert events == [on_next(10, "alpha"), on_completed(10)]

    def test_recorded_events_pass_through(self) -> None:
        event = on_next(1, "alpha")
        assert from_recorded([event])[0] is event

    def test_unknown_kind_in_tuple(self) -> None:
        with pytest.raises(InvalidEventLogError, match="unknown event kind"):
            from_recorded([(10, "tick", None)])

    def test_unrecognised_message(self) -> None:
        with pytest.raises(InvalidEventLogError, match="cannot interpret"):
            from_recorded(["alpha"])

    def test_result_is_a_recorded_event_list(self) -> None:
        events = from_recorded([(0, "completed", None)])
        assert all(isinstance(e, RecordedEvent) for e in events)

    def test_unprintable_payload_without_debug_logging(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.INFO, logger="rxexpect")

        events = from_recorded([(0, "next", _Unprintable())])

        assert len(events) == 1
