"""Exception types raised by rxexpect.

Matchers never raise on their own: every failed expectation is routed
through :func:`rxexpect.verify.verify` to a reporter.  These exceptions
cover the two remaining cases, a recorded log that breaks the recording
contract and the strict reporter signalling pytest.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rxexpect.reporting import SourceLocation


class RxExpectError(Exception):
    """Base class for all rxexpect errors."""


class InvalidEventLogError(RxExpectError, ValueError):
    """A recorded event log violates the recording contract."""


class ExpectationFailed(RxExpectError, AssertionError):
    """Raised by :class:`~rxexpect.reporting.RaisingReporter` on failure.

    Subclasses :class:`AssertionError` so pytest reports it as a test
    failure rather than an error.
    """

    def __init__(self, message: str, location: SourceLocation) -> None:
        super().__init__(f"{location}: {message}")
        self.message = message
        self.location = location
