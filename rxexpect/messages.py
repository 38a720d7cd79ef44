"""Failure-message descriptors and their rendering.

Matchers never build the final failure text themselves.  They describe
it with a :class:`FailureMessage` and let :func:`rxexpect.verify.verify`
render it for the polarity the expectation was evaluated under.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Self


class MessageKind(Enum):
    """Shapes a failure message can take."""
    CONCISE = "concise"
    FULL = "full"
    EXACT = "exact"


@dataclass(frozen=True)
class FailureMessage:
    """A failure message that can be rendered for either polarity.

    ``CONCISE`` and ``EXACT`` render ``text`` as given, after an
    ``expected to`` or ``expected not to`` lead-in.  ``FULL`` also appends
    the observed outcome: ``, did not <actual>`` when the expectation was
    positive and ``, did <actual>`` when it was negated.

    Attributes:
        kind: Message shape.
        text: What was expected, phrased as a verb clause (``"error"``).
        actual: Description of the observed outcome (``FULL`` only).
    """
    kind: MessageKind
    text: str
    actual: str = ""

    @classmethod
    def concise(cls, text: str) -> Self:
        """A plain statement of the expectation."""
        return cls(kind=MessageKind.CONCISE, text=text)

    @classmethod
    def full(cls, text: str, actual: str) -> Self:
        """An expectation followed by what actually happened."""
        return cls(kind=MessageKind.FULL, text=text, actual=actual)

    @classmethod
    def exact(cls, text: str) -> Self:
        """A body used verbatim whatever the polarity."""
        return cls(kind=MessageKind.EXACT, text=text)

    def render(self, negated: bool) -> str:
        """Render the human-readable message."""
        lead = "expected not to" if negated else "expected to"
        if self.kind is MessageKind.FULL:
            outcome = "did" if negated else "did not"
            return f"{lead} {self.text}, {outcome} {self.actual}"
        return f"{lead} {self.text}"

    def __str__(self) -> str:
        return self.render(negated=False)
