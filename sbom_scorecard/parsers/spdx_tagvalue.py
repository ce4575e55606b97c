"""Decoder for the SPDX 2.x tag-value syntax.

Produces a dictionary in the SPDX JSON shape (``packages``, ``files``,
``creationInfo``) so the same pydantic model validates every SPDX syntax.
Tags the scorecard does not read are skipped.
"""

from __future__ import annotations

import re
from typing import Any

from ..exceptions import DecodeError

_TAG_LINE = re.compile(r"^([A-Za-z][A-Za-z0-9_]*):\s*(.*)$")
_TEXT_OPEN = "<text>"
_TEXT_CLOSE = "</text>"

_DOCUMENT_TAGS = {
    "SPDXVersion": "spdxVersion",
    "DataLicense": "dataLicense",
    "DocumentName": "name",
    "DocumentNamespace": "documentNamespace",
}

_PACKAGE_TAGS = {
    "SPDXID": "SPDXID",
    "PackageVersion": "versionInfo",
    "PackageLicenseConcluded": "licenseConcluded",
    "PackageLicenseDeclared": "licenseDeclared",
}


def _error(line_no: int, message: str) -> DecodeError:
    return DecodeError("tag-value", f"tag-value: line {line_no}: {message}")


def _iter_pairs(text: str):
    """Yield ``(line_no, tag, value)`` with ``<text>`` blocks joined."""
    lines = text.splitlines()
    index = 0
    while index < len(lines):
        line_no = index + 1
        line = lines[index].strip()
        index += 1
        if not line or line.startswith("#"):
            continue
        match = _TAG_LINE.match(line)
        if not match:
            raise _error(line_no, "expected 'Tag: value'")
        tag, value = match.group(1), match.group(2).strip()
        if value.startswith(_TEXT_OPEN):
            parts = [value[len(_TEXT_OPEN) :]]
            while _TEXT_CLOSE not in parts[-1]:
                if index >= len(lines):
                    raise _error(line_no, f"unterminated {_TEXT_OPEN} block for {tag}")
                parts.append(lines[index])
                index += 1
            joined = "\n".join(parts)
            value = joined[: joined.index(_TEXT_CLOSE)].strip()
        yield line_no, tag, value


def _parse_checksum(line_no: int, value: str) -> dict[str, str]:
    if ":" not in value:
        raise _error(line_no, f"malformed checksum {value!r}")
    algorithm, checksum = value.split(":", 1)
    return {"algorithm": algorithm.strip(), "checksumValue": checksum.strip()}


def _parse_external_ref(line_no: int, value: str) -> dict[str, str]:
    parts = value.split(None, 2)
    if len(parts) != 3:
        raise _error(line_no, f"malformed ExternalRef {value!r}")
    category, ref_type, locator = parts
    return {"referenceCategory": category, "referenceType": ref_type, "referenceLocator": locator}


def decode_spdx_tagvalue(data: bytes) -> dict[str, Any]:
    """Decode SPDX tag-value bytes into an SPDX JSON-shaped dictionary.

    Raises:
        DecodeError: If the bytes are not UTF-8 or a line is not a tag-value pair.
    """
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise DecodeError("tag-value", f"tag-value: {e}") from e

    document: dict[str, Any] = {}
    creation_info: dict[str, Any] = {}
    packages: list[dict[str, Any]] = []
    files: list[dict[str, Any]] = []
    current: dict[str, Any] | None = None
    section = "document"

    for line_no, tag, value in _iter_pairs(text):
        if tag == "Creator":
            creation_info.setdefault("creators", []).append(value)
        elif tag == "Created":
            creation_info["created"] = value
        elif tag == "PackageName":
            current = {"name": value}
            packages.append(current)
            section = "package"
        elif tag == "FileName":
            current = {"fileName": value}
            files.append(current)
            section = "file"
        elif tag == "SnippetSPDXID":
            current = None
            section = "snippet"
        elif section == "document":
            if tag in _DOCUMENT_TAGS:
                document[_DOCUMENT_TAGS[tag]] = value
            elif tag == "SPDXID":
                document["SPDXID"] = value
        elif section == "package" and current is not None:
            if tag in _PACKAGE_TAGS:
                current[_PACKAGE_TAGS[tag]] = value
            elif tag == "PackageChecksum":
                current.setdefault("checksums", []).append(_parse_checksum(line_no, value))
            elif tag == "ExternalRef":
                current.setdefault("externalRefs", []).append(_parse_external_ref(line_no, value))
        elif section == "file" and current is not None:
            if tag == "SPDXID":
                current["SPDXID"] = value
            elif tag == "FileChecksum":
                current.setdefault("checksums", []).append(_parse_checksum(line_no, value))

    if creation_info:
        document["creationInfo"] = creation_info
    if packages:
        document["packages"] = packages
    if files:
        document["files"] = files
    return document
