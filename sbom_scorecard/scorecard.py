"""SBOM quality scorecard.

A :class:`ScorecardReport` is built from one SBOM file. A single pass over the
normalized packages and files fills the raw counters; every criterion is then
derived from those counters on demand, so repeated calls always agree with
each other and with the rendered text report.

Scoring rules:

* Percentage criteria divide hits by the number of packages (or files). An
  SBOM with nothing to count scores 0 with "No packages" / "No files"; it is
  unscoreable, not perfect.
* A package counts once toward identification even when it carries both a
  purl and a CPE.
* Creation info starts at 1.0 when a tool is recorded and loses 0.2 for a
  tool without a version and 0.2 for a missing timestamp.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Callable

from license_expression import ExpressionError, get_spdx_licensing

from .adapters import normalize
from .documents.normalized import NormalizedDocument
from .exceptions import DocumentLoadError
from .ingestion import load_document
from .logging import getLogger, log_info
from .sdk.enums import SBOMFamily
from .sdk.results import ReportMetadata, ReportValue, pretty_percent

logger = getLogger(__name__)

_licensing = get_spdx_licensing()

NO_PACKAGES = "No packages"
NO_FILES = "No files"
NO_CREATION_INFO = "No creation info found."
NO_TOOL = "No tool was used to create the sbom."
TOOL_WITHOUT_VERSION = "The tool used to create the sbom does not have a version."
NO_TIMESTAMP = "There is no timestamp for when the sbom was created."
CREATION_INFO_DEDUCTION = 0.2


def is_well_formed_license(value: str) -> bool:
    """Check whether a license string parses as an SPDX license expression.

    Only the syntax is checked; unknown license identifiers are accepted.
    """
    try:
        return _licensing.parse(value, validate=False) is not None
    except ExpressionError:
        return False


@dataclass
class ScorecardCounters:
    """Raw per-document counts consumed by the evaluators."""

    total_packages: int = 0
    total_files: int = 0
    has_license: int = 0
    has_well_formed_license: int = 0
    has_package_digest: int = 0
    has_purl: int = 0
    has_cpe: int = 0
    has_purl_or_cpe: int = 0
    has_file_digest: int = 0
    has_package_version: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


def collect_counters(document: NormalizedDocument | None) -> ScorecardCounters:
    """Count criterion hits in one pass. A missing document yields all zeros."""
    counters = ScorecardCounters()
    if document is None:
        return counters

    for package in document.packages:
        counters.total_packages += 1
        if package.license.is_present:
            counters.has_license += 1
            if is_well_formed_license(package.license.value or ""):
                counters.has_well_formed_license += 1
        if package.checksums:
            counters.has_package_digest += 1
        if package.has_purl:
            counters.has_purl += 1
        if package.has_cpe:
            counters.has_cpe += 1
        if package.has_purl or package.has_cpe:
            counters.has_purl_or_cpe += 1
        if package.has_version:
            counters.has_package_version += 1

    for file in document.files:
        counters.total_files += 1
        if file.checksums:
            counters.has_file_digest += 1

    return counters


class ScorecardReport:
    """Scorecard for a single SBOM document.

    The report is usable even when the document failed to load: counters are
    zero, ``is_spec_compliant()`` carries the load error and every other
    criterion falls back to its empty policy.

    Example:
        >>> report = build_report("sbom.spdx.json")
        >>> report.package_licenses().ratio
        0.6
        >>> print(report.report())
    """

    def __init__(
        self,
        document: NormalizedDocument | None = None,
        error: DocumentLoadError | None = None,
        *,
        path: Path | None = None,
        family: SBOMFamily | None = None,
        decoder: str | None = None,
    ) -> None:
        self.document = document
        self.error = error
        self.path = path
        self.family = family or (document.family if document is not None else None)
        self.decoder = decoder
        self.counters = collect_counters(document if error is None else None)

    @property
    def valid(self) -> bool:
        return self.error is None and self.document is not None

    def metadata(self) -> ReportMetadata:
        return ReportMetadata(total_packages=self.counters.total_packages)

    def _package_ratio(self, hits: int) -> ReportValue:
        total = self.counters.total_packages
        if total == 0:
            return ReportValue(ratio=0.0, reasoning=NO_PACKAGES)
        return ReportValue(ratio=hits / total)

    def is_spec_compliant(self) -> ReportValue:
        if self.error is not None:
            return ReportValue(ratio=0.0, reasoning=str(self.error))
        if self.document is None:
            return ReportValue(ratio=0.0, reasoning="No document loaded")
        return ReportValue(ratio=1.0)

    def package_identification(self) -> ReportValue:
        counters = self.counters
        total = counters.total_packages
        if total == 0:
            return ReportValue(ratio=0.0, reasoning=NO_PACKAGES)
        either = pretty_percent(counters.has_purl_or_cpe, total)
        purls = pretty_percent(counters.has_purl, total)
        cpes = pretty_percent(counters.has_cpe, total)
        return ReportValue(
            ratio=counters.has_purl_or_cpe / total,
            reasoning=f"{either}% have either purls ({purls}%) or CPEs ({cpes}%)",
        )

    def package_versions(self) -> ReportValue:
        return self._package_ratio(self.counters.has_package_version)

    def package_licenses(self) -> ReportValue:
        counters = self.counters
        total = counters.total_packages
        if total == 0:
            return ReportValue(ratio=0.0, reasoning=NO_PACKAGES)
        well_formed = pretty_percent(counters.has_well_formed_license, total)
        return ReportValue(
            ratio=counters.has_license / total,
            reasoning=f"{well_formed}% have well-formed license expressions",
        )

    def package_digests(self) -> ReportValue:
        return self._package_ratio(self.counters.has_package_digest)

    def file_digests(self) -> ReportValue:
        total = self.counters.total_files
        if total == 0:
            return ReportValue(ratio=0.0, reasoning=NO_FILES)
        return ReportValue(ratio=self.counters.has_file_digest / total)

    def creation_info(self) -> ReportValue:
        creation = self.document.creation if self.valid else None
        if creation is None:
            return ReportValue(ratio=0.0, reasoning=NO_CREATION_INFO)

        tools = creation.tools()
        if not tools:
            return ReportValue(ratio=0.0, reasoning=NO_TOOL)

        reasons: list[str] = []
        if not any(tool.has_version_token() for tool in tools):
            reasons.append(TOOL_WITHOUT_VERSION)
        if not creation.created:
            reasons.append(NO_TIMESTAMP)

        score = 1.0 - CREATION_INFO_DEDUCTION * len(reasons)
        return ReportValue(ratio=max(score, 0.0), reasoning=", ".join(reasons))

    def criteria(self) -> dict[str, ReportValue]:
        """Every criterion keyed by name, in a fixed order."""
        return {name: evaluator(self) for name, _, evaluator in CRITERIA}

    def report(self) -> str:
        counters = self.counters
        packages = counters.total_packages
        lines = [
            f"{packages} total packages",
            f"{counters.total_files} total files",
            f"{pretty_percent(counters.has_license, packages)}% have licenses.",
            f"{pretty_percent(counters.has_package_digest, packages)}% have package digest.",
            f"{pretty_percent(counters.has_package_version, packages)}% have package versions.",
            f"{pretty_percent(counters.has_purl, packages)}% have purls.",
            f"{pretty_percent(counters.has_cpe, packages)}% have CPEs.",
            f"{pretty_percent(counters.has_file_digest, counters.total_files)}% have file digest.",
            f"Spec valid? {_flag(self.is_spec_compliant().ratio == 1)}",
            f"Has creation info? {_flag(self.creation_info().ratio == 1)}",
        ]
        return "\n".join(lines) + "\n"

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": str(self.path) if self.path is not None else None,
            "family": self.family.value if self.family is not None else None,
            "decoder": self.decoder,
            "metadata": self.metadata().to_dict(),
            "counters": self.counters.to_dict(),
            "criteria": {name: value.to_dict() for name, value in self.criteria().items()},
        }


def _flag(value: bool) -> str:
    return "true" if value else "false"


# (name, title, evaluator) in report order
CRITERIA: tuple[tuple[str, str, Callable[[ScorecardReport], ReportValue]], ...] = (
    ("spec_compliance", "Spec Compliance", ScorecardReport.is_spec_compliant),
    ("creation_info", "Generation Info", ScorecardReport.creation_info),
    ("package_identification", "Package Identification", ScorecardReport.package_identification),
    ("package_versions", "Package Versions", ScorecardReport.package_versions),
    ("package_licenses", "Package Licenses", ScorecardReport.package_licenses),
    ("package_digests", "Package Digests", ScorecardReport.package_digests),
    ("file_digests", "File Digests", ScorecardReport.file_digests),
)

CRITERION_TITLES: dict[str, str] = {name: title for name, title, _ in CRITERIA}


def build_report(path: str | Path, family: SBOMFamily | str | None = None) -> ScorecardReport:
    """Load, normalize and count one SBOM file.

    Never raises for document problems; a failed load produces a degraded
    report whose spec-compliance criterion carries the error.

    Args:
        path: Local path of the SBOM.
        family: SBOM family, a CLI choice (``spdx``, ``cdx``, ``guess``) or None
            to detect it from the content.
    """
    result = load_document(path, SBOMFamily.from_choice(family))
    if not result.ok:
        return ScorecardReport(error=result.error, path=result.path, family=result.family)

    document = normalize(result.document)
    report = ScorecardReport(document, path=result.path, family=result.family, decoder=result.decoder)
    log_info(
        logger,
        "[scorecard] built report",
        path=result.path,
        family=document.family.value,
        packages=report.counters.total_packages,
        files=report.counters.total_files,
    )
    return report
