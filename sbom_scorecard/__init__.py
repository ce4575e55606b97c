"""SBOM quality scorecard for SPDX and CycloneDX documents."""

from .comparator import Comparison, compare
from .grading import Grade, grade
from .ingestion import LoadResult, detect_family, load_document
from .scorecard import ScorecardReport, build_report
from .sdk import ReportMetadata, ReportValue, SBOMFamily

__version__ = "0.1.0"

__all__ = [
    "Comparison",
    "Grade",
    "LoadResult",
    "ReportMetadata",
    "ReportValue",
    "SBOMFamily",
    "ScorecardReport",
    "build_report",
    "compare",
    "detect_family",
    "grade",
    "load_document",
]
