"""
Pydantic models for SPDX 2.x documents.

Only the parts of the document the scorecard reads are modelled: packages,
files and creation info, plus the document header used to tell a real SPDX
document from an unrelated JSON/YAML file. The JSON field names are kept so
tag-value and YAML input can be mapped onto the same shape.

Spec reference: https://spdx.github.io/spdx-spec/v2.3/
"""

from __future__ import annotations

from pydantic import Field

from .base import SBOMModel


class SPDXChecksum(SBOMModel):
    algorithm: str = ""
    checksumValue: str = ""


class SPDXExternalRef(SBOMModel):
    """Package external reference (purl, cpe22Type, cpe23Type, swid, ...)."""

    referenceCategory: str = ""
    referenceType: str = ""
    referenceLocator: str = ""


class SPDXPackage(SBOMModel):
    SPDXID: str = ""
    name: str = ""
    versionInfo: str = ""
    licenseConcluded: str = ""
    licenseDeclared: str = ""
    checksums: list[SPDXChecksum] = Field(default_factory=list)
    externalRefs: list[SPDXExternalRef] = Field(default_factory=list)


class SPDXFile(SBOMModel):
    SPDXID: str = ""
    fileName: str = ""
    checksums: list[SPDXChecksum] = Field(default_factory=list)


class SPDXCreationInfo(SBOMModel):
    """Document creation info.

    ``creators`` holds raw ``"Type: name"`` strings, e.g. ``"Tool: syft-0.80.0"``.
    """

    creators: list[str] = Field(default_factory=list)
    created: str = ""


class SPDXDocument(SBOMModel):
    """Root SPDX 2.x document."""

    spdxVersion: str = ""
    SPDXID: str = ""
    name: str = ""
    dataLicense: str = ""
    documentNamespace: str = ""
    creationInfo: SPDXCreationInfo | None = None
    packages: list[SPDXPackage] = Field(default_factory=list)
    files: list[SPDXFile] = Field(default_factory=list)
