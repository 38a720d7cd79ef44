"""Failure reporters: where a failed expectation ends up.

A reporter is any callable taking ``(message, location)``.  Each
:class:`~rxexpect.expectation.Expectation` can carry its own reporter;
when it does not, the default reporter of the current context is used.

The default is held in a :class:`contextvars.ContextVar`, so swapping it
with :func:`capture_failures` only affects the current thread or task.

Usage::

    with capture_failures() as reporter:
        expect(log).never()
    assert reporter.messages == ["expected to never emit, did emit <1> event(s)"]
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Protocol

from rxexpect.errors import ExpectationFailed

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# SourceLocation
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SourceLocation:
    """File and line a failure is attributed to."""
    file: str
    line: int

    @classmethod
    def capture(cls, depth: int = 1) -> SourceLocation:
        """Capture the location of a caller.

        Args:
            depth: How many frames above the caller of ``capture`` to
                look.  ``depth=1`` is the function that called the
                function calling ``capture``.
        """
        frame = sys._getframe(depth + 1)
        return cls(file=frame.f_code.co_filename, line=frame.f_lineno)

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


# ---------------------------------------------------------------------------
# Reporters
# ---------------------------------------------------------------------------

class Reporter(Protocol):
    """Receives rendered failure messages."""

    def __call__(self, message: str, location: SourceLocation) -> None: ...


class RaisingReporter:
    """Signals the host test framework by raising :class:`ExpectationFailed`."""

    def __call__(self, message: str, location: SourceLocation) -> None:
        raise ExpectationFailed(message, location)

    def __repr__(self) -> str:
        return "RaisingReporter()"


@dataclass(frozen=True)
class Failure:
    """A single captured failure."""
    message: str
    location: SourceLocation


@dataclass
class CollectingReporter:
    """Records failures instead of signalling them.

    Used for soft assertions and for testing matcher diagnostics.
    """
    failures: list[Failure] = field(default_factory=list)

    def __call__(self, message: str, location: SourceLocation) -> None:
        self.failures.append(Failure(message=message, location=location))

    @property
    def messages(self) -> list[str]:
        """Failure messages in the order they were reported."""
        return [f.message for f in self.failures]

    def clear(self) -> None:
        self.failures.clear()

    def __len__(self) -> int:
        return len(self.failures)

    def summary(self) -> str:
        """One line per failure, prefixed with its location."""
        return "\n".join(f"{f.location}: {f.message}" for f in self.failures)


# ---------------------------------------------------------------------------
# Default reporter
# ---------------------------------------------------------------------------

_default_reporter: ContextVar[Reporter] = ContextVar(
    "rxexpect_default_reporter", default=RaisingReporter()
)


def get_default_reporter() -> Reporter:
    """Return the reporter used by expectations without their own."""
    return _default_reporter.get()


def set_default_reporter(reporter: Reporter) -> None:
    """Replace the default reporter for the current context."""
    _default_reporter.set(reporter)


@contextmanager
def use_reporter(reporter: Reporter) -> Iterator[Reporter]:
    """Install ``reporter`` as the default for the duration of the block."""
    token = _default_reporter.set(reporter)
    try:
        yield reporter
    finally:
        _default_reporter.reset(token)


@contextmanager
def capture_failures() -> Iterator[CollectingReporter]:
    """Collect every failure reported inside the block."""
    reporter = CollectingReporter()
    with use_reporter(reporter):
        yield reporter
