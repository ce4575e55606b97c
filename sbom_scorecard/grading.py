"""Weighted point totals for a scorecard.

Each headline criterion is worth a fixed number of points; a section scores
``ratio * max_points``. The weights add up to 100.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .scorecard import CRITERION_TITLES, ScorecardReport

SECTION_WEIGHTS: tuple[tuple[str, int], ...] = (
    ("spec_compliance", 25),
    ("creation_info", 15),
    ("package_identification", 20),
    ("package_versions", 20),
    ("package_licenses", 20),
)


@dataclass(frozen=True)
class GradeSection:
    name: str
    title: str
    points: float
    max_points: int
    reasoning: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "title": self.title,
            "points": self.points,
            "max_points": self.max_points,
            "reasoning": self.reasoning,
        }


@dataclass(frozen=True)
class Grade:
    sections: list[GradeSection] = field(default_factory=list)

    @property
    def total(self) -> float:
        return sum(section.points for section in self.sections)

    @property
    def max_total(self) -> int:
        return sum(section.max_points for section in self.sections)

    def render(self) -> str:
        """Render the grade as an aligned text table."""
        rows = [
            (section.title, _points(section.points, section.max_points), section.reasoning) for section in self.sections
        ]
        rows.append(("Total points", _points(self.total, self.max_total), ""))
        title_width = max(len(row[0]) for row in rows)
        points_width = max(len(row[1]) for row in rows)
        lines = [f"{title:<{title_width}}  {points:>{points_width}}  {reason}".rstrip() for title, points, reason in rows]
        return "\n".join(lines) + "\n"

    def to_dict(self) -> dict[str, Any]:
        return {
            "sections": [section.to_dict() for section in self.sections],
            "total": self.total,
            "max_total": self.max_total,
        }


def _points(points: float, max_points: int) -> str:
    return f"{points:.1f}/{max_points}"


def grade(report: ScorecardReport) -> Grade:
    """Compute the weighted grade of a report."""
    criteria = report.criteria()
    sections = []
    for name, max_points in SECTION_WEIGHTS:
        value = criteria[name]
        sections.append(
            GradeSection(
                name=name,
                title=CRITERION_TITLES[name],
                points=value.ratio * max_points,
                max_points=max_points,
                reasoning=value.reasoning,
            )
        )
    return Grade(sections=sections)
