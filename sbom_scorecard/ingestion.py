"""Multi-format SBOM ingestion.

A document is read once and offered to a priority-ordered list of decoders for
its family. The first decoder whose output validates into a non-empty document
model wins. When every decoder fails, the error of the last one is reported,
since later decoders are the more permissive ones and their failure says the
most about the input.

Failures never propagate past :func:`load_document`; they are returned as part
of the :class:`LoadResult` so callers can still build a (degraded) report.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence, Union

from pydantic import ValidationError as PydanticValidationError

from .documents.base import SBOMModel
from .documents.cyclonedx import CycloneDXBom
from .documents.spdx import SPDXDocument
from .exceptions import (
    DecodeError,
    DocumentLoadError,
    DocumentParseError,
    DocumentReadError,
    EmptyDocumentError,
)
from .logging import getLogger, log_debug, log_info, log_warning
from .parsers import Decoder, decode_cyclonedx_xml, decode_json, decode_spdx_tagvalue, decode_yaml
from .parsers.cyclonedx_xml import CYCLONEDX_NAMESPACE_PREFIX
from .sdk.enums import SBOMFamily

logger = getLogger(__name__)

DocumentModel = Union[SPDXDocument, CycloneDXBom]


@dataclass(frozen=True)
class DecoderSpec:
    """A named decoder in a family's priority list."""

    name: str
    decode: Decoder


SPDX_DECODERS: tuple[DecoderSpec, ...] = (
    DecoderSpec("json", decode_json),
    DecoderSpec("tag-value", decode_spdx_tagvalue),
    DecoderSpec("yaml", decode_yaml),
)

CYCLONEDX_DECODERS: tuple[DecoderSpec, ...] = (
    DecoderSpec("json", decode_json),
    DecoderSpec("xml", decode_cyclonedx_xml),
)

FAMILY_DECODERS: dict[SBOMFamily, tuple[DecoderSpec, ...]] = {
    SBOMFamily.SPDX: SPDX_DECODERS,
    SBOMFamily.CYCLONEDX: CYCLONEDX_DECODERS,
}

FAMILY_MODELS: dict[SBOMFamily, type[SBOMModel]] = {
    SBOMFamily.SPDX: SPDXDocument,
    SBOMFamily.CYCLONEDX: CycloneDXBom,
}


@dataclass(frozen=True)
class LoadResult:
    """Outcome of loading one SBOM file.

    Exactly one of ``document`` and ``error`` is set.
    """

    path: Path
    family: SBOMFamily | None
    document: DocumentModel | None = None
    error: DocumentLoadError | None = None
    decoder: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.document is not None


def _validation_message(e: PydanticValidationError) -> str:
    """Condense a pydantic ValidationError to its first problem."""
    errors = e.errors()
    if not errors:
        return "invalid document"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "invalid value")
    return f"{location}: {message}" if location else message


def _looks_like_cyclonedx(data: dict[str, Any]) -> bool:
    if str(data.get("bomFormat", "")).lower() == "cyclonedx":
        return True
    return "specVersion" in data and "components" in data


def detect_family(data: bytes) -> SBOMFamily:
    """Guess the SBOM family from raw bytes.

    JSON documents are classified by their top-level keys; otherwise the
    CycloneDX XML namespace is looked for. Anything else is treated as SPDX,
    whose decoder chain covers the text-based syntaxes.
    """
    try:
        decoded = decode_json(data)
    except DecodeError:
        decoded = None

    if decoded is not None:
        if "spdxVersion" in decoded:
            return SBOMFamily.SPDX
        if _looks_like_cyclonedx(decoded):
            return SBOMFamily.CYCLONEDX
        return SBOMFamily.SPDX

    if CYCLONEDX_NAMESPACE_PREFIX.encode() in data:
        return SBOMFamily.CYCLONEDX
    return SBOMFamily.SPDX


def parse_document(
    data: bytes,
    family: SBOMFamily,
    decoders: Sequence[DecoderSpec] | None = None,
) -> tuple[DocumentModel, str]:
    """Run the decoder chain for ``family`` over ``data``.

    Args:
        data: Raw file content.
        family: SBOM family whose model the decoded data must validate into.
        decoders: Override of the family's default priority list.

    Returns:
        The validated document model and the name of the decoder that produced it.

    Raises:
        EmptyDocumentError: A decoder parsed the input but found no SBOM content,
            and no later decoder did better.
        DocumentParseError: Every decoder failed; carries the last decoder's message.
    """
    chain = tuple(decoders) if decoders is not None else FAMILY_DECODERS[family]
    model = FAMILY_MODELS[family]

    last_error: DecodeError | None = None
    empty_error: EmptyDocumentError | None = None

    for spec in chain:
        try:
            raw = spec.decode(data)
            document = model.model_validate(raw)
        except DecodeError as e:
            last_error = e
            log_debug(logger, "[ingestion] decoder rejected input", family=family.value, decoder=spec.name, error=e)
            continue
        except PydanticValidationError as e:
            last_error = DecodeError(spec.name, f"{spec.name}: {_validation_message(e)}")
            log_debug(logger, "[ingestion] model validation failed", family=family.value, decoder=spec.name)
            continue

        if document.is_empty():
            empty_error = EmptyDocumentError(decoder=spec.name)
            log_debug(logger, "[ingestion] decoder produced an empty document", family=family.value, decoder=spec.name)
            continue

        return document, spec.name

    if empty_error is not None:
        raise empty_error
    if last_error is None:
        raise DocumentParseError(f"No decoders configured for {family.value}")
    raise DocumentParseError(last_error.message, decoder=last_error.decoder)


def load_document(
    path: str | Path,
    family: SBOMFamily | None = None,
    decoders: Sequence[DecoderSpec] | None = None,
) -> LoadResult:
    """Read and parse an SBOM file without raising for document problems.

    Args:
        path: Local file path.
        family: SBOM family, or None to detect it from the content.
        decoders: Optional override of the family's decoder chain.

    Returns:
        A LoadResult carrying either the document model or the load error.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        error = DocumentReadError(f"opening SBOM document: {e}")
        log_warning(logger, "[ingestion] unable to read file", path=path, error=e)
        return LoadResult(path=path, family=family, error=error)

    resolved = family or detect_family(data)
    try:
        document, decoder = parse_document(data, resolved, decoders)
    except DocumentLoadError as e:
        log_warning(logger, "[ingestion] unable to load SBOM", path=path, family=resolved.value, error=e)
        return LoadResult(path=path, family=resolved, error=e)

    log_info(logger, "[ingestion] loaded SBOM", path=path, family=resolved.value, decoder=decoder)
    return LoadResult(path=path, family=resolved, document=document, decoder=decoder)
