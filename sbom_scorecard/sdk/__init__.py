"""Core types shared by the loaders, evaluators and renderers."""

from .enums import CreatorType, LicenseAssertionState, SBOMFamily
from .results import ReportMetadata, ReportValue, pretty_percent, ratio_percent

__all__ = [
    "CreatorType",
    "LicenseAssertionState",
    "ReportMetadata",
    "ReportValue",
    "SBOMFamily",
    "pretty_percent",
    "ratio_percent",
]
