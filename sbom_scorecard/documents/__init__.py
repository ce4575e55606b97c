"""Document models: per-family pydantic models and the normalized view."""

from .cyclonedx import CycloneDXBom
from .normalized import (
    CreationMetadata,
    Creator,
    LicenseAssertion,
    NormalizedDocument,
    NormalizedFile,
    NormalizedPackage,
)
from .spdx import SPDXDocument

__all__ = [
    "CreationMetadata",
    "Creator",
    "CycloneDXBom",
    "LicenseAssertion",
    "NormalizedDocument",
    "NormalizedFile",
    "NormalizedPackage",
    "SPDXDocument",
]
