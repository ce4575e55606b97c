"""Exception hierarchy for SBOM loading.

None of these escape :func:`sbom_scorecard.scorecard.build_report`. They are
recorded on the report and surfaced through ``is_spec_compliant()``.
"""

from __future__ import annotations


class ScorecardError(Exception):
    """Base exception for sbom_scorecard."""

    pass


class DecodeError(ScorecardError):
    """Raised by a single decoder when the bytes are not in its syntax."""

    def __init__(self, decoder: str, message: str) -> None:
        super().__init__(message)
        self.decoder = decoder
        self.message = message


class DocumentLoadError(ScorecardError):
    """A document could not be turned into a usable SBOM."""

    pass


class DocumentReadError(DocumentLoadError):
    """The file itself could not be read."""

    pass


class DocumentParseError(DocumentLoadError):
    """No decoder accepted the file.

    The message is the one reported by the last decoder that was tried.
    """

    def __init__(self, message: str, decoder: str | None = None) -> None:
        super().__init__(message)
        self.decoder = decoder


class EmptyDocumentError(DocumentLoadError):
    """A decoder accepted the file but it holds no SBOM content."""

    DEFAULT_MESSAGE = "Parsed the file, but was unable to find an SBOM in it"

    def __init__(self, message: str = DEFAULT_MESSAGE, decoder: str | None = None) -> None:
        super().__init__(message)
        self.decoder = decoder
