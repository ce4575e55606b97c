"""Translate an SPDX 2.x document model into the normalized view."""

from __future__ import annotations

from ..documents.normalized import (
    CreationMetadata,
    Creator,
    LicenseAssertion,
    NormalizedDocument,
    NormalizedFile,
    NormalizedPackage,
)
from ..documents.spdx import SPDXChecksum, SPDXDocument, SPDXPackage
from ..sdk.enums import SBOMFamily

PURL_REFERENCE_TYPE = "purl"
CPE_REFERENCE_PREFIX = "cpe"


def _checksums(checksums: list[SPDXChecksum]) -> set[str]:
    return {
        f"{checksum.algorithm.upper()}:{checksum.checksumValue}" for checksum in checksums if checksum.checksumValue
    }


def normalize_package(package: SPDXPackage) -> NormalizedPackage:
    purls: list[str] = []
    cpes: list[str] = []
    others: list[str] = []
    for ref in package.externalRefs:
        ref_type = ref.referenceType.strip()
        if ref_type.lower() == PURL_REFERENCE_TYPE:
            purls.append(ref.referenceLocator)
        elif ref_type.lower().startswith(CPE_REFERENCE_PREFIX):
            cpes.append(ref.referenceLocator)
        elif ref.referenceLocator:
            others.append(ref.referenceLocator)

    return NormalizedPackage(
        name=package.name,
        version=package.versionInfo,
        license=LicenseAssertion.resolve(package.licenseConcluded, package.licenseDeclared),
        checksums=_checksums(package.checksums),
        purls=purls,
        cpes=cpes,
        other_identifiers=others,
    )


def normalize_spdx(document: SPDXDocument) -> NormalizedDocument:
    creation = None
    if document.creationInfo is not None:
        creation = CreationMetadata(
            creators=[Creator.from_spdx(raw) for raw in document.creationInfo.creators],
            created=document.creationInfo.created.strip(),
        )

    return NormalizedDocument(
        family=SBOMFamily.SPDX,
        spec_version=document.spdxVersion,
        packages=[normalize_package(package) for package in document.packages],
        files=[NormalizedFile(name=file.fileName, checksums=_checksums(file.checksums)) for file in document.files],
        creation=creation,
    )
