"""The verification routine shared by every matcher.

A matcher evaluates its predicate to a boolean and describes the failure
with a :class:`~rxexpect.messages.FailureMessage`.  :func:`verify` then
decides, given the expectation's polarity, whether that outcome is a
failure and hands the rendered message to a reporter.

A positive expectation fails when ``passed`` is False; a negated one
fails when ``passed`` is True.  Both collapse to ``passed == negated``.
"""

from __future__ import annotations

import logging

from rxexpect.messages import FailureMessage
from rxexpect.reporting import Reporter, SourceLocation, get_default_reporter

logger = logging.getLogger(__name__)


def verify(
    passed: bool,
    message: FailureMessage,
    negated: bool,
    location: SourceLocation,
    reporter: Reporter | None = None,
) -> bool:
    """Report a failure if ``passed`` does not satisfy the polarity.

    Args:
        passed: Whether the matcher's predicate held over the log.
        message: Failure descriptor, rendered only when reporting.
        negated: Whether the expectation was negated.
        location: Where the expectation was created.
        reporter: Destination for the failure; the context default when
            ``None``.

    Returns:
        True if the expectation held, False if a failure was reported.

    Raises:
        Nothing of its own.  Only an opted-in raising reporter, such as
        pytest strict mode, turns a failure into
        :class:`~rxexpect.errors.ExpectationFailed`.
    """
    passed = bool(passed)
    failed = passed == negated
    logger.debug(
        "verify %s (passed=%s, negated=%s) -> %s",
        message.kind.value,
        passed,
        negated,
        "FAIL" if failed else "ok",
    )
    if not failed:
        return True

    text = message.render(negated)
    logger.info("Expectation failed at %s: %s", location, text)
    target = reporter if reporter is not None else get_default_reporter()
    target(text, location)
    return False
