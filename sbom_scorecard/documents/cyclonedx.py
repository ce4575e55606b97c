"""
Pydantic models for CycloneDX 1.x BOMs.

Covers components (including nested ones), hashes, licenses, identifiers and
the metadata block. ``metadata.tools`` is accepted in both the legacy array form
(1.2-1.4) and the 1.5+ ``{components, services}`` object form; both are
flattened into a list of :class:`CycloneDXTool`.

Spec reference: https://cyclonedx.org/docs/1.6/json/
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from .base import SBOMModel


class CycloneDXHash(SBOMModel):
    alg: str = ""
    content: str = ""


class CycloneDXLicense(SBOMModel):
    id: str = ""
    name: str = ""
    acknowledgement: str = ""


class CycloneDXLicenseChoice(SBOMModel):
    """One entry of a ``licenses`` array: either a license or an expression."""

    license: CycloneDXLicense | None = None
    expression: str = ""
    acknowledgement: str = ""

    @property
    def value(self) -> str:
        if self.expression:
            return self.expression
        if self.license is not None:
            return self.license.id or self.license.name
        return ""

    @property
    def is_concluded(self) -> bool:
        ack = self.acknowledgement or (self.license.acknowledgement if self.license else "")
        return ack.lower() == "concluded"


class CycloneDXSwid(SBOMModel):
    tagId: str = ""
    name: str = ""


class CycloneDXComponent(SBOMModel):
    type: str = ""
    bom_ref: str = Field(default="", alias="bom-ref")
    group: str = ""
    name: str = ""
    version: str = ""
    purl: str = ""
    cpe: str = ""
    swid: CycloneDXSwid | None = None
    hashes: list[CycloneDXHash] = Field(default_factory=list)
    licenses: list[CycloneDXLicenseChoice] = Field(default_factory=list)
    components: list[CycloneDXComponent] = Field(default_factory=list)

    def walk(self):
        """Yield this component and every nested component, depth first."""
        yield self
        for child in self.components:
            yield from child.walk()


CycloneDXComponent.model_rebuild()


class CycloneDXTool(SBOMModel):
    vendor: str = ""
    name: str = ""
    version: str = ""

    def label(self) -> str:
        return " ".join(bit for bit in (self.vendor, self.name, self.version) if bit)


class CycloneDXContact(SBOMModel):
    name: str = ""
    email: str = ""


class CycloneDXOrganization(SBOMModel):
    name: str = ""


def _tool_from_entry(entry: Any) -> Any:
    """Map a 1.5+ tool component/service onto the legacy tool shape."""
    if not isinstance(entry, dict):
        return entry
    vendor = entry.get("vendor") or entry.get("group") or entry.get("publisher")
    if not vendor:
        for key in ("provider", "supplier", "manufacturer"):
            org = entry.get(key)
            if isinstance(org, dict) and org.get("name"):
                vendor = org["name"]
                break
    return {"vendor": vendor or "", "name": entry.get("name") or "", "version": entry.get("version") or ""}


class CycloneDXMetadata(SBOMModel):
    timestamp: str = ""
    tools: list[CycloneDXTool] = Field(default_factory=list)
    authors: list[CycloneDXContact] = Field(default_factory=list)
    manufacture: CycloneDXOrganization | None = None
    supplier: CycloneDXOrganization | None = None
    component: CycloneDXComponent | None = None

    @field_validator("tools", mode="before")
    @classmethod
    def flatten_tools(cls, value: Any) -> Any:
        if isinstance(value, dict):
            entries = list(value.get("components") or []) + list(value.get("services") or [])
            return [_tool_from_entry(entry) for entry in entries]
        if isinstance(value, list):
            return [_tool_from_entry(entry) for entry in value]
        return value


class CycloneDXBom(SBOMModel):
    """Root CycloneDX BOM."""

    bomFormat: str = ""
    specVersion: str = ""
    serialNumber: str = ""
    metadata: CycloneDXMetadata | None = None
    components: list[CycloneDXComponent] = Field(default_factory=list)

    def all_components(self) -> list[CycloneDXComponent]:
        return [component for top in self.components for component in top.walk()]
