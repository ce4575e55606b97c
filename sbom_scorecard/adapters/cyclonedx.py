"""Translate a CycloneDX BOM model into the normalized view.

Components of type ``file`` become files; every other component, nested ones
included, becomes a package. ``metadata.component`` describes the subject of
the BOM and is not counted.
"""

from __future__ import annotations

from ..documents.cyclonedx import CycloneDXBom, CycloneDXComponent, CycloneDXHash, CycloneDXMetadata
from ..documents.normalized import (
    CreationMetadata,
    Creator,
    LicenseAssertion,
    NormalizedDocument,
    NormalizedFile,
    NormalizedPackage,
)
from ..sdk.enums import CreatorType, SBOMFamily

FILE_COMPONENT_TYPE = "file"


def _hashes(hashes: list[CycloneDXHash]) -> set[str]:
    return {f"{entry.alg.upper()}:{entry.content}" for entry in hashes if entry.content}


def _license(component: CycloneDXComponent) -> LicenseAssertion:
    concluded = [choice.value for choice in component.licenses if choice.is_concluded and choice.value]
    declared = [choice.value for choice in component.licenses if not choice.is_concluded and choice.value]
    return LicenseAssertion.resolve(
        concluded[0] if concluded else None,
        declared[0] if declared else None,
    )


def normalize_component(component: CycloneDXComponent) -> NormalizedPackage:
    others = []
    if component.swid is not None and component.swid.tagId:
        others.append(component.swid.tagId)
    return NormalizedPackage(
        name=component.name,
        version=component.version,
        license=_license(component),
        checksums=_hashes(component.hashes),
        purls=[component.purl] if component.purl else [],
        cpes=[component.cpe] if component.cpe else [],
        other_identifiers=others,
    )


def _creation(metadata: CycloneDXMetadata) -> CreationMetadata:
    creators = [Creator(CreatorType.TOOL, tool.label()) for tool in metadata.tools]
    for author in metadata.authors:
        label = " ".join(bit for bit in (author.name, author.email) if bit)
        if label:
            creators.append(Creator(CreatorType.PERSON, label))
    for org in (metadata.manufacture, metadata.supplier):
        if org is not None and org.name:
            creators.append(Creator(CreatorType.ORGANIZATION, org.name))
    return CreationMetadata(creators=creators, created=metadata.timestamp.strip())


def normalize_cyclonedx(bom: CycloneDXBom) -> NormalizedDocument:
    packages: list[NormalizedPackage] = []
    files: list[NormalizedFile] = []
    for component in bom.all_components():
        if component.type.lower() == FILE_COMPONENT_TYPE:
            files.append(NormalizedFile(name=component.name, checksums=_hashes(component.hashes)))
        else:
            packages.append(normalize_component(component))

    return NormalizedDocument(
        family=SBOMFamily.CYCLONEDX,
        spec_version=bom.specVersion,
        packages=packages,
        files=files,
        creation=_creation(bom.metadata) if bom.metadata is not None else None,
    )
