"""Side-by-side comparison of two SBOMs.

Both documents go through the full pipeline independently and are compared
only through their criteria, so the inputs may use different SBOM families.
A load failure on one side leaves the other side's scores untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .logging import getLogger, log_info
from .scorecard import CRITERION_TITLES, ScorecardReport, build_report
from .sdk.enums import SBOMFamily
from .sdk.results import ReportValue, ratio_percent

logger = getLogger(__name__)


@dataclass(frozen=True)
class CriterionDelta:
    name: str
    left: ReportValue
    right: ReportValue

    @property
    def difference(self) -> float:
        return abs(self.left.ratio - self.right.ratio)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "left": self.left.to_dict(),
            "right": self.right.to_dict(),
            "difference": self.difference,
        }


@dataclass
class Comparison:
    left: ScorecardReport
    right: ScorecardReport
    deltas: list[CriterionDelta] = field(default_factory=list)

    def delta(self, name: str) -> CriterionDelta:
        for entry in self.deltas:
            if entry.name == name:
                return entry
        raise KeyError(name)

    def render(self) -> str:
        """Render the comparison as a fixed-width text table."""
        left_label = _label(self.left, "left")
        right_label = _label(self.right, "right")
        rows = [("Criterion", left_label, right_label, "Difference")]
        rows.append(
            (
                "Total packages",
                str(self.left.metadata().total_packages),
                str(self.right.metadata().total_packages),
                str(abs(self.left.metadata().total_packages - self.right.metadata().total_packages)),
            )
        )
        for entry in self.deltas:
            rows.append(
                (
                    CRITERION_TITLES.get(entry.name, entry.name),
                    _percent(entry.left.ratio),
                    _percent(entry.right.ratio),
                    _percent(entry.difference),
                )
            )

        widths = [max(len(row[column]) for row in rows) for column in range(4)]
        lines = []
        for index, row in enumerate(rows):
            lines.append(
                "  ".join(
                    cell.ljust(widths[column]) if column == 0 else cell.rjust(widths[column])
                    for column, cell in enumerate(row)
                ).rstrip()
            )
            if index == 0:
                lines.append("  ".join("-" * width for width in widths))

        for label, report in ((left_label, self.left), (right_label, self.right)):
            if report.error is not None:
                lines.append(f"{label}: {report.error}")
        return "\n".join(lines) + "\n"

    def to_dict(self) -> dict[str, Any]:
        return {
            "left": self.left.to_dict(),
            "right": self.right.to_dict(),
            "deltas": [entry.to_dict() for entry in self.deltas],
        }


def _label(report: ScorecardReport, fallback: str) -> str:
    return report.path.name if report.path is not None else fallback


def _percent(ratio: float) -> str:
    return f"{ratio_percent(ratio)}%"


def compare_reports(left: ScorecardReport, right: ScorecardReport) -> Comparison:
    """Pair up the criteria of two already-built reports."""
    left_criteria = left.criteria()
    right_criteria = right.criteria()
    deltas = [
        CriterionDelta(name=name, left=value, right=right_criteria[name])
        for name, value in left_criteria.items()
        if name in right_criteria
    ]
    return Comparison(left=left, right=right, deltas=deltas)


def compare(
    left_path: str | Path,
    right_path: str | Path,
    *,
    left_family: SBOMFamily | str | None = None,
    right_family: SBOMFamily | str | None = None,
) -> Comparison:
    """Score two SBOM files and compare them criterion by criterion."""
    left = build_report(left_path, left_family)
    right = build_report(right_path, right_family)
    comparison = compare_reports(left, right)
    log_info(logger, "[comparator] compared SBOMs", left=left_path, right=right_path, criteria=len(comparison.deltas))
    return comparison
