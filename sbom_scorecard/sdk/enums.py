"""Enumerations shared across the scorecard pipeline."""

from enum import Enum


class SBOMFamily(str, Enum):
    """SBOM format family.

    Each family has its own decoder chain and document model but is scored
    by the same evaluator set.
    """

    SPDX = "spdx"
    """SPDX 2.x documents (JSON, tag-value, YAML)."""

    CYCLONEDX = "cyclonedx"
    """CycloneDX 1.x BOMs (JSON, XML)."""

    @classmethod
    def from_choice(cls, value: "str | SBOMFamily | None") -> "SBOMFamily | None":
        """Resolve a CLI/config choice. ``guess`` and None mean auto-detect."""
        if value is None or isinstance(value, SBOMFamily):
            return value
        lowered = value.strip().lower()
        if lowered in ("", "guess"):
            return None
        if lowered in ("cdx", "cyclonedx"):
            return cls.CYCLONEDX
        if lowered == "spdx":
            return cls.SPDX
        raise ValueError(f"Unsupported SBOM family: {value}")


class LicenseAssertionState(str, Enum):
    """How a package asserts its license.

    The raw sentinels ("", "NONE", "NOASSERTION") are classified once during
    normalization so evaluators never compare strings.
    """

    ABSENT = "absent"
    """No license information, or an explicit NONE."""

    NOT_ASSERTED = "not_asserted"
    """The author declined to assert a license (NOASSERTION)."""

    PRESENT = "present"
    """A concrete license identifier or expression."""


class CreatorType(str, Enum):
    """Type of entity that created an SBOM."""

    TOOL = "Tool"
    PERSON = "Person"
    ORGANIZATION = "Organization"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: str | None) -> "CreatorType":
        if not value:
            return cls.OTHER
        for member in cls:
            if member.value.lower() == value.strip().lower():
                return member
        return cls.OTHER
