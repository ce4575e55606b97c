"""Per-family adapters into :class:`~sbom_scorecard.documents.NormalizedDocument`."""

from __future__ import annotations

from ..documents.cyclonedx import CycloneDXBom
from ..documents.normalized import NormalizedDocument
from ..documents.spdx import SPDXDocument
from .cyclonedx import normalize_cyclonedx
from .spdx import normalize_spdx


def normalize(document: SPDXDocument | CycloneDXBom) -> NormalizedDocument:
    """Normalize a parsed document of either family."""
    if isinstance(document, SPDXDocument):
        return normalize_spdx(document)
    if isinstance(document, CycloneDXBom):
        return normalize_cyclonedx(document)
    raise TypeError(f"Unsupported document model: {type(document).__name__}")


__all__ = ["normalize", "normalize_cyclonedx", "normalize_spdx"]
