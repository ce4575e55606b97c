"""Normalized SBOM representation shared by every evaluator.

Each family adapter translates its own document model into these dataclasses,
so the scoring rules are written once regardless of input format.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from ..sdk.enums import CreatorType, LicenseAssertionState, SBOMFamily

_ABSENT_SENTINELS = {"", "NONE"}
_NOT_ASSERTED_SENTINELS = {"NOASSERTION"}
_DIGIT = re.compile(r"\d")


@dataclass(frozen=True)
class LicenseAssertion:
    """A package license classified against the SPDX sentinels."""

    state: LicenseAssertionState
    value: str | None = None

    @classmethod
    def classify(cls, raw: str | None) -> "LicenseAssertion":
        cleaned = (raw or "").strip()
        if cleaned.upper() in _ABSENT_SENTINELS:
            return cls(LicenseAssertionState.ABSENT)
        if cleaned.upper() in _NOT_ASSERTED_SENTINELS:
            return cls(LicenseAssertionState.NOT_ASSERTED)
        return cls(LicenseAssertionState.PRESENT, cleaned)

    @classmethod
    def resolve(cls, concluded: str | None, declared: str | None) -> "LicenseAssertion":
        """Pick the effective assertion: concluded first, declared as fallback."""
        concluded_assertion = cls.classify(concluded)
        if concluded_assertion.is_present:
            return concluded_assertion
        declared_assertion = cls.classify(declared)
        if declared_assertion.is_present:
            return declared_assertion
        if LicenseAssertionState.NOT_ASSERTED in (concluded_assertion.state, declared_assertion.state):
            return cls(LicenseAssertionState.NOT_ASSERTED)
        return cls(LicenseAssertionState.ABSENT)

    @property
    def is_present(self) -> bool:
        return self.state == LicenseAssertionState.PRESENT


ABSENT_LICENSE = LicenseAssertion(LicenseAssertionState.ABSENT)


@dataclass
class NormalizedPackage:
    name: str = ""
    version: str = ""
    license: LicenseAssertion = ABSENT_LICENSE
    checksums: set[str] = field(default_factory=set)
    purls: list[str] = field(default_factory=list)
    cpes: list[str] = field(default_factory=list)
    other_identifiers: list[str] = field(default_factory=list)

    @property
    def has_purl(self) -> bool:
        return bool(self.purls)

    @property
    def has_cpe(self) -> bool:
        return bool(self.cpes)

    @property
    def has_version(self) -> bool:
        return bool(self.version.strip())


@dataclass
class NormalizedFile:
    name: str = ""
    checksums: set[str] = field(default_factory=set)


@dataclass(frozen=True)
class Creator:
    creator_type: CreatorType
    name: str

    @classmethod
    def from_spdx(cls, raw: str) -> "Creator":
        """Parse an SPDX ``"Type: name"`` creator string."""
        if ":" in raw:
            kind, name = raw.split(":", 1)
            return cls(CreatorType.parse(kind), name.strip())
        return cls(CreatorType.OTHER, raw.strip())

    @property
    def is_tool(self) -> bool:
        return self.creator_type == CreatorType.TOOL

    def has_version_token(self) -> bool:
        # A digit anywhere in the identifying string counts as a version
        return bool(_DIGIT.search(self.name))


@dataclass
class CreationMetadata:
    creators: list[Creator] = field(default_factory=list)
    created: str = ""

    def tools(self) -> list[Creator]:
        return [creator for creator in self.creators if creator.is_tool]


@dataclass
class NormalizedDocument:
    """Format-independent view of a parsed SBOM."""

    family: SBOMFamily
    spec_version: str = ""
    packages: list[NormalizedPackage] = field(default_factory=list)
    files: list[NormalizedFile] = field(default_factory=list)
    creation: CreationMetadata | None = None
