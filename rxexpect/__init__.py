"""rxexpect -- fluent expectations for streams recorded under virtual time.

Wraps a recorded event log in an :class:`Expectation` whose matchers
describe how the stream should have behaved, and reports a descriptive
message when it did not.
"""

__version__ = "0.1.0"

# Re-export key types for convenience.
from rxexpect.errors import ExpectationFailed, InvalidEventLogError, RxExpectError
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
from rxexpect.expectation import Expectation, expect
from rxexpect.messages import FailureMessage, MessageKind
from rxexpect.recorder import Recorder
from rxexpect.reporting import (
    CollectingReporter,
    Failure,
    RaisingReporter,
    Reporter,
    SourceLocation,
    capture_failures,
    get_default_reporter,
    set_default_reporter,
    use_reporter,
)
from rxexpect.verify import verify

__all__ = [
    "CollectingReporter",
    "EventKind",
    "Expectation",
    "ExpectationFailed",
    "Failure",
    "FailureMessage",
    "InvalidEventLogError",
    "MessageKind",
    "RaisingReporter",
    "RecordedEvent",
    "Recorder",
    "Reporter",
    "RxExpectError",
    "SourceLocation",
    "capture_failures",
    "expect",
    "format_events",
    "from_recorded",
    "get_default_reporter",
    "on_completed",
    "on_error",
    "on_next",
    "set_default_reporter",
    "use_reporter",
    "validate_log",
    "verify",
]
