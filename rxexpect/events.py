"""Recorded event types for streams captured under a virtual-time scheduler.

A recorded log is an ordered sequence of :class:`RecordedEvent` objects.
Insertion order is chronological order: the recording side guarantees
non-decreasing ``time`` and at most one terminal event (error or
completed), always last.

Constructor helpers mirror the usual test-scheduler vocabulary::

    log = [on_next(10, "alpha"), on_next(20, "bravo"), on_completed(20)]
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from rxexpect.errors import InvalidEventLogError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# EventKind / RecordedEvent
# ---------------------------------------------------------------------------

class EventKind(Enum):
    """The three notification kinds a stream can deliver."""
    NEXT = "next"
    ERROR = "error"
    COMPLETED = "completed"


@dataclass(frozen=True)
class RecordedEvent:
    """A single notification stamped with the virtual time it arrived at.

    Attributes:
        time: Virtual time (non-negative integer tick).
        kind: Which notification was delivered.
        value: The element for ``NEXT``, the error object for ``ERROR``,
            and ``None`` for ``COMPLETED``.
    """
    time: int
    kind: EventKind
    value: object = None

    def __post_init__(self) -> None:
        if self.time < 0:
            msg = f"virtual time must be non-negative, got {self.time}"
            raise InvalidEventLogError(msg)

    @property
    def is_next(self) -> bool:
        return self.kind is EventKind.NEXT

    @property
    def is_error(self) -> bool:
        return self.kind is EventKind.ERROR

    @property
    def is_completed(self) -> bool:
        return self.kind is EventKind.COMPLETED

    @property
    def is_terminal(self) -> bool:
        """True for error and completed events."""
        return self.kind is not EventKind.NEXT

    @property
    def element(self) -> object:
        """The emitted element, or ``None`` if this is not a next event."""
        return self.value if self.is_next else None

    @property
    def error(self) -> object:
        """The error object, or ``None`` if this is not an error event."""
        return self.value if self.is_error else None

    def __str__(self) -> str:
        if self.is_completed:
            return f"completed({self.time})"
        return f"{self.kind.value}({self.time}, {self.value})"


# -- Event constructor functions --------------------------------------------

def on_next(time: int, value: object) -> RecordedEvent:
    """Create a next event carrying ``value`` at ``time``."""
    return RecordedEvent(time=time, kind=EventKind.NEXT, value=value)


def on_error(time: int, error: object) -> RecordedEvent:
    """Create an error event at ``time``."""
    return RecordedEvent(time=time, kind=EventKind.ERROR, value=error)


def on_completed(time: int) -> RecordedEvent:
    """Create a completed event at ``time``."""
    return RecordedEvent(time=time, kind=EventKind.COMPLETED)


# ---------------------------------------------------------------------------
# Log helpers
# ---------------------------------------------------------------------------

def validate_log(events: Sequence[RecordedEvent]) -> None:
    """Check that ``events`` honours the recording contract.

    Raises:
        InvalidEventLogError: If times decrease, or a terminal event is
            followed by any other event.
    """
    previous: RecordedEvent | None = None
    for index, event in enumerate(events):
        if previous is not None:
            if event.time < previous.time:
                msg = (
                    f"event #{index} at time {event.time} precedes "
                    f"event #{index - 1} at time {previous.time}"
                )
                raise InvalidEventLogError(msg)
            if previous.is_terminal:
                msg = f"event #{index} ({event}) follows terminal event {previous}"
                raise InvalidEventLogError(msg)
        previous = event


def format_events(events: Iterable[RecordedEvent]) -> str:
    """Render a log compactly, e.g. ``[next(10, alpha), completed(10)]``."""
    return "[" + ", ".join(str(e) for e in events) + "]"


_NOTIFICATION_KINDS: dict[str, EventKind] = {
    "N": EventKind.NEXT,
    "E": EventKind.ERROR,
    "C": EventKind.COMPLETED,
}


def _convert_one(message: object) -> RecordedEvent:
    """Convert one foreign recorded message into a :class:`RecordedEvent`."""
    if isinstance(message, RecordedEvent):
        return message

    # (time, kind, payload) tuples
    if isinstance(message, tuple) and len(message) == 3:
        time, raw_kind, payload = message
        try:
            kind = raw_kind if isinstance(raw_kind, EventKind) else EventKind(str(raw_kind))
        except ValueError as exc:
            raise InvalidEventLogError(f"unknown event kind: {raw_kind!r}") from exc
        if kind is EventKind.COMPLETED:
            payload = None
        return RecordedEvent(time=int(time), kind=kind, value=payload)

    # Recorded[Notification]-style objects: .time plus .value.kind in N/E/C
    notification = getattr(message, "value", None)
    raw_kind = getattr(notification, "kind", None)
    if hasattr(message, "time") and raw_kind in _NOTIFICATION_KINDS:
        kind = _NOTIFICATION_KINDS[raw_kind]
        time = int(message.time)  # type: ignore[attr-defined]
        if kind is EventKind.NEXT:
            return on_next(time, notification.value)  # type: ignore[union-attr]
        if kind is EventKind.ERROR:
            return on_error(time, notification.exception)  # type: ignore[union-attr]
        return on_completed(time)

    msg = f"cannot interpret recorded message: {message!r}"
    raise InvalidEventLogError(msg)


def from_recorded(messages: Iterable[object]) -> list[RecordedEvent]:
    """Convert recorded messages from a test scheduler into a log.

    Accepts :class:`RecordedEvent` instances unchanged, ``(time, kind,
    payload)`` tuples, and objects shaped like reactivex's
    ``Recorded[Notification]`` (``.time`` and a ``.value`` whose ``kind``
    is ``"N"``, ``"E"`` or ``"C"``).

    Raises:
        InvalidEventLogError: If a message cannot be interpreted.
    """
    events = [_convert_one(m) for m in messages]
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Converted %d recorded message(s): %s", len(events), format_events(events))
    return events
