"""An observer that records notifications against a virtual clock.

The recorder does not schedule anything.  It stamps each notification
with whatever ``clock()`` returns when it arrives, so it can sit behind
any push-based source driven by a test scheduler::

    scheduler_time = 0
    recorder = Recorder(lambda: scheduler_time)
    recorder.on_next("alpha")
    recorder.on_completed()
    expect(recorder.events).just("alpha")
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from rxexpect.events import RecordedEvent, on_completed, on_error, on_next

logger = logging.getLogger(__name__)


class Recorder:
    """Collects notifications into an event log.

    Once an error or completion has been recorded, later notifications are
    dropped, as the observer grammar requires.
    """

    def __init__(self, clock: Callable[[], int]) -> None:
        self._clock = clock
        self._events: list[RecordedEvent] = []

    @property
    def events(self) -> list[RecordedEvent]:
        """A copy of the events recorded so far."""
        return list(self._events)

    @property
    def terminated(self) -> bool:
        return bool(self._events) and self._events[-1].is_terminal

    def _record(self, event: RecordedEvent) -> None:
        if self.terminated:
            logger.debug("Dropping %s after terminal event", event)
            return
        self._events.append(event)

    def on_next(self, value: object) -> None:
        self._record(on_next(self._clock(), value))

    def on_error(self, error: object) -> None:
        self._record(on_error(self._clock(), error))

    def on_completed(self) -> None:
        self._record(on_completed(self._clock()))

    def __len__(self) -> int:
        return len(self._events)
