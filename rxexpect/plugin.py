"""pytest integration.

Registered through the ``pytest11`` entry point, so it is active as soon
as rxexpect is installed.

Configuration:
    ``rxexpect_mode`` (ini) or ``--rxexpect-mode`` (command line, wins):
    ``soft`` (default) collects every failure and fails the test once its
    body has finished, ``strict`` raises on the first failed expectation.
    In both modes the reporter is installed as the context default for
    every test, so plain :func:`rxexpect.expect` follows the mode too.

Fixtures:
    ``expect_stream``: same signature as :func:`rxexpect.expect`, bound to
    the test's reporter.
    ``failure_capture``: a :class:`CollectingReporter` installed as the
    default reporter for the whole test.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence

import pytest

from rxexpect.events import RecordedEvent
from rxexpect.expectation import Expectation, expect
from rxexpect.reporting import (
    CollectingReporter,
    RaisingReporter,
    Reporter,
    SourceLocation,
    use_reporter,
)

logger = logging.getLogger(__name__)

MODES = ("strict", "soft")

_soft_failures = pytest.StashKey[CollectingReporter]()


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("rxexpect")
    group.addoption(
        "--rxexpect-mode",
        action="store",
        dest="rxexpect_mode",
        default=None,
        choices=MODES,
        help="How failed stream expectations are reported: strict or soft.",
    )
    parser.addini(
        "rxexpect_mode",
        help="Default reporting mode for stream expectations (strict or soft).",
        default="soft",
    )


def resolve_mode(config: pytest.Config) -> str:
    """Return the configured mode, command line first, then ini."""
    mode = config.getoption("rxexpect_mode") or config.getini("rxexpect_mode")
    if mode not in MODES:
        msg = f"rxexpect_mode must be one of {', '.join(MODES)}, got {mode!r}"
        raise pytest.UsageError(msg)
    return str(mode)


def pytest_configure(config: pytest.Config) -> None:
    resolve_mode(config)


@pytest.fixture(autouse=True)
def rxexpect_reporter(request: pytest.FixtureRequest) -> Iterator[Reporter]:
    """The reporter every expectation in this test reports to by default."""
    mode = resolve_mode(request.config)
    logger.debug("rxexpect mode for %s: %s", request.node.nodeid, mode)
    reporter: Reporter
    if mode == "strict":
        reporter = RaisingReporter()
    else:
        collector = CollectingReporter()
        request.node.stash[_soft_failures] = collector
        reporter = collector
    with use_reporter(reporter):
        yield reporter


@pytest.hookimpl(wrapper=True)
def pytest_runtest_call(item: pytest.Item) -> Iterator[None]:
    """Fail a soft-mode test that collected failures once its body returns."""
    result = yield
    collector = item.stash.get(_soft_failures, None)
    if collector:
        logger.info("%d stream expectation(s) failed in %s", len(collector), item.nodeid)
        pytest.fail(collector.summary(), pytrace=False)
    return result


@pytest.fixture
def expect_stream(rxexpect_reporter: Reporter) -> Callable[..., Expectation]:
    """Factory creating expectations bound to this test's reporter."""

    def factory(
        log: Sequence[RecordedEvent],
        *,
        location: SourceLocation | None = None,
        strict: bool = False,
    ) -> Expectation:
        if location is None:
            location = SourceLocation.capture(1)
        return expect(log, location=location, reporter=rxexpect_reporter, strict=strict)

    return factory


@pytest.fixture
def failure_capture() -> Iterator[CollectingReporter]:
    """Capture every failure reported through the default reporter."""
    reporter = CollectingReporter()
    with use_reporter(reporter):
        yield reporter
