"""Fluent expectations over a recorded event log.

An :class:`Expectation` binds a recorded log, the source location it was
created at, a negation flag and an optional reporter.  Each matcher
evaluates one predicate over the log and hands the outcome to
:func:`~rxexpect.verify.verify`; matchers never raise themselves and
return the expectation so calls can be chained.

Usage::

    log = [on_next(10, "alpha"), on_completed(10)]
    expect(log).just("alpha")
    expect(log).not_.error()
    expect(log).next_times(1).complete_at(10)
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from rxexpect.events import RecordedEvent, format_events, validate_log
from rxexpect.messages import FailureMessage
from rxexpect.reporting import Reporter, SourceLocation
from rxexpect.verify import verify

logger = logging.getLogger(__name__)

ValueMatcher = Callable[[object], tuple[bool, str]]
"""Predicate over a next element returning ``(passed, message)``."""


def _errors_equal(actual: object, expected: object) -> bool:
    """Equality for recorded errors.

    Exceptions compare by identity in Python, so two exceptions of the
    same type with equal ``args`` are also considered equal.
    """
    if actual is expected or bool(actual == expected):
        return True
    return (
        isinstance(actual, BaseException)
        and type(actual) is type(expected)
        and actual.args == expected.args  # type: ignore[attr-defined]
    )


@dataclass(frozen=True)
class Expectation:
    """A declarative expectation about a recorded log.

    Attributes:
        log: The recorded events, oldest first.
        location: Where failures are attributed.
        negated: Whether matchers should expect the opposite outcome.
        reporter: Failure destination; the context default when ``None``.
    """
    log: tuple[RecordedEvent, ...]
    location: SourceLocation
    negated: bool = False
    reporter: Reporter | None = None

    @property
    def not_(self) -> Expectation:
        """A copy of this expectation with the opposite polarity."""
        return dataclasses.replace(self, negated=not self.negated)

    def _verify(self, passed: bool, message: FailureMessage) -> Expectation:
        verify(passed, message, self.negated, self.location, self.reporter)
        return self

    def _next_events(self) -> list[RecordedEvent]:
        return [e for e in self.log if e.is_next]

    def _last(self) -> RecordedEvent | None:
        return self.log[-1] if self.log else None

    # -- Presence / absence ---------------------------------------------------

    def next(self) -> Expectation:
        """Succeed when at least one next event was recorded."""
        return self._verify(
            any(e.is_next for e in self.log),
            FailureMessage.concise("next"),
        )

    def never(self) -> Expectation:
        """Succeed when no event at all was recorded, like ``Observable.never()``."""
        count = len(self.log)
        suffix = f", did emit <{count}> event(s)" if count else ""
        return self._verify(count == 0, FailureMessage.exact(f"never emit{suffix}"))

    def empty(self) -> Expectation:
        """Succeed when the stream only completed, like ``Observable.empty()``."""
        first = self.log[0] if self.log else None
        return self._verify(
            first is not None and first.is_completed,
            FailureMessage.concise("complete with no other events"),
        )

    # -- Time / count -------------------------------------------------------

    def next_at(self, time: int) -> Expectation:
        """Succeed when a next event was recorded at virtual ``time``."""
        actual = "get any events" if not self.log else "get an event"
        return self._verify(
            any(e.is_next and e.time == time for e in self.log),
            FailureMessage.full(f"next @ <{time}>", actual),
        )

    def next_times(self, count: int) -> Expectation:
        """Succeed when exactly ``count`` next events were recorded."""
        actual_count = len(self._next_events())
        return self._verify(
            actual_count == count,
            FailureMessage.exact(f"next <{count}> times, did get <{actual_count}> events"),
        )

    # -- Value matchers -------------------------------------------------------

    def next_match(self, index: int, matcher: ValueMatcher) -> Expectation:
        """Succeed when the next element at ``index`` satisfies ``matcher``.

        ``index`` counts next events only.  An index outside the recorded
        next events is reported as a failure, never raised.
        """
        next_events = self._next_events()
        if not 0 <= index < len(next_events):
            return self._verify(
                False,
                FailureMessage.exact(
                    f"get next @ index <{index}>, "
                    f"not enough next events (got <{len(next_events)}>)"
                ),
            )
        passed, message = matcher(next_events[index].element)
        return self._verify(passed, FailureMessage.exact(message))

    def first_next_match(self, matcher: ValueMatcher) -> Expectation:
        return self.next_match(0, matcher)

    def last_next_match(self, matcher: ValueMatcher) -> Expectation:
        return self.next_match(len(self._next_events()) - 1, matcher)

    def next_equal(self, index: int, value: object) -> Expectation:
        """Succeed when the next element at ``index`` equals ``value``."""

        def equals(actual: object) -> tuple[bool, str]:
            return bool(actual == value), f"equal <{value}>, got <{actual}>"

        return self.next_match(index, equals)

    def first_next_equal(self, value: object) -> Expectation:
        return self.next_equal(0, value)

    def last_next_equal(self, value: object) -> Expectation:
        return self.next_equal(len(self._next_events()) - 1, value)

    def just(self, value: object) -> Expectation:
        """Succeed when the log is one ``value`` completing at the same time.

        Mirrors ``Observable.just(value)``.  Checks run in order and the
        first failing one is reported.
        """
        msg = f"get <{value}> then complete"
        if len(self.log) != 2:
            return self._verify(
                False, FailureMessage.exact(f"{msg}, emitted <{len(self.log)}> event(s)")
            )
        first, last = self.log
        if not last.is_completed:
            return self._verify(False, FailureMessage.exact(f"{msg}, did not complete"))
        if first.time != last.time:
            return self._verify(
                False, FailureMessage.exact(f"{msg}, did not complete immediately")
            )
        return self._verify(
            first.is_next and bool(first.element == value),
            FailureMessage.exact(f"{msg}, got <{first.element}>"),
        )

    # -- Error matchers -------------------------------------------------------

    def error(self) -> Expectation:
        """Succeed when the stream terminated with an error."""
        last = self._last()
        return self._verify(
            last is not None and last.is_error,
            FailureMessage.concise("error"),
        )

    def error_at(self, time: int) -> Expectation:
        """Succeed when the stream errored at virtual ``time``."""
        last = self._last()
        if last is None or not last.is_error:
            return self._verify(False, FailureMessage.concise(f"error @ <{time}>"))
        actual_time = [e for e in self.log if e.is_error][-1].time
        suffix = "" if actual_time == time else f", did error @ <{actual_time}> instead"
        return self._verify(
            actual_time == time,
            FailureMessage.exact(f"error @ <{time}>{suffix}"),
        )

    def error_after(self, count: int) -> Expectation:
        """Succeed when the stream errored after ``count`` preceding events."""
        last = self._last()
        if last is None or not last.is_error:
            return self._verify(
                False, FailureMessage.concise(f"error after <{count}> events")
            )
        actual_count = len(self.log) - 1
        suffix = "" if actual_count == count else f", did error after <{actual_count}> instead"
        return self._verify(
            actual_count == count,
            FailureMessage.exact(f"error after <{count}> events{suffix}"),
        )

    def error_with_type(self, error_type: type) -> Expectation:
        """Succeed when the terminal error is exactly of ``error_type``.

        Subclasses of ``error_type`` do not match.
        """
        name = error_type.__name__
        last = self._last()
        if last is None or not last.is_error:
            return self._verify(False, FailureMessage.concise(f"error with <{name}>"))
        actual_name = type(last.error).__name__
        passed = type(last.error) is error_type
        suffix = "" if passed else f", did error with <{actual_name}> instead"
        return self._verify(passed, FailureMessage.exact(f"error with <{name}>{suffix}"))

    def error_with(self, expected: object) -> Expectation:
        """Succeed when the terminal error equals ``expected``.

        The recorded error must be an instance of ``type(expected)``;
        a mismatch in kind is reported like any other failure.
        """
        last = self._last()
        if last is None or not last.is_error:
            return self._verify(False, FailureMessage.concise(f"error with <{expected!r}>"))
        actual = last.error
        passed = isinstance(actual, type(expected)) and _errors_equal(actual, expected)
        return self._verify(
            passed,
            FailureMessage.exact(f"error with <{expected!r}>, got <{actual!r}>"),
        )

    # -- Completion matchers --------------------------------------------------

    def complete(self) -> Expectation:
        """Succeed when the stream terminated with a completed event."""
        last = self._last()
        return self._verify(
            last is not None and last.is_completed,
            FailureMessage.concise("complete"),
        )

    def complete_at(self, time: int) -> Expectation:
        """Succeed when the stream completed at virtual ``time``."""
        last = self._last()
        if last is None or not last.is_completed:
            return self._verify(False, FailureMessage.concise(f"complete @ <{time}>"))
        suffix = "" if last.time == time else f", did complete @ <{last.time}> instead"
        return self._verify(
            last.time == time,
            FailureMessage.exact(f"complete @ <{time}>{suffix}"),
        )

    def complete_after(self, count: int) -> Expectation:
        """Succeed when the stream completed after ``count`` preceding events."""
        last = self._last()
        if last is None or not last.is_completed:
            return self._verify(
                False, FailureMessage.concise(f"complete after <{count}> events")
            )
        actual_count = len(self.log) - 1
        suffix = "" if actual_count == count else f", did complete after <{actual_count}> instead"
        return self._verify(
            actual_count == count,
            FailureMessage.exact(f"complete after <{count}> events{suffix}"),
        )


def expect(
    log: Sequence[RecordedEvent],
    *,
    location: SourceLocation | None = None,
    reporter: Reporter | None = None,
    strict: bool = False,
) -> Expectation:
    """Create an expectation over a recorded log.

    Args:
        log: Recorded events, oldest first.  The sequence is copied.
        location: Where failures are attributed; defaults to the caller.
        reporter: Failure destination; the context default when ``None``.
        strict: Validate the recording contract before wrapping.

    Raises:
        InvalidEventLogError: If ``strict`` and the log is malformed.
    """
    events = tuple(log)
    if strict:
        validate_log(events)
    if location is None:
        location = SourceLocation.capture(1)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("expect %s at %s", format_events(events), location)
    return Expectation(log=events, location=location, reporter=reporter)
