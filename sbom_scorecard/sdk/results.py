"""Result dataclasses returned by the scorecard evaluators.

Every criterion produces a :class:`ReportValue`. Its ratio is the only
machine-readable signal; the reasoning is advisory text for humans.
"""

import math
from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class ReportValue:
    """Outcome of a single criterion.

    Attributes:
        ratio: Fraction of entities satisfying the criterion, in [0, 1].
            Never rounded; rendering code truncates to a whole percent.
        reasoning: Human-readable explanation. Empty when there is nothing
            to add.
    """

    ratio: float
    reasoning: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert the value to a dictionary for JSON serialization."""
        return asdict(self)


@dataclass(frozen=True)
class ReportMetadata:
    """Document-level summary used by cross-format tables.

    Attributes:
        total_packages: Number of packages in the scored document.
    """

    total_packages: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert metadata to the TotalPackages-keyed dictionary."""
        return {"TotalPackages": self.total_packages}


def pretty_percent(hits: int, total: int) -> int:
    """Return ``hits / total`` as a truncated whole percent, 0 when total is 0."""
    if total <= 0:
        return 0
    return hits * 100 // total


def ratio_percent(ratio: float) -> int:
    """Render a ratio with the same truncation as :func:`pretty_percent`.

    A tolerance absorbs float error so ``ratio_percent(hits / total)`` equals
    ``pretty_percent(hits, total)``.
    """
    return math.floor(ratio * 100 + 1e-9)
