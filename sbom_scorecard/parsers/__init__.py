"""Decoders that turn raw SBOM bytes into plain dictionaries.

A decoder is any callable ``(bytes) -> dict`` that raises
:class:`~sbom_scorecard.exceptions.DecodeError` when the bytes are not in its
syntax. The ingestion layer validates the dictionary into a document model.
"""

from __future__ import annotations

import json
from typing import Any, Callable

import yaml

from ..exceptions import DecodeError
from .cyclonedx_xml import decode_cyclonedx_xml
from .spdx_tagvalue import decode_spdx_tagvalue

Decoder = Callable[[bytes], dict[str, Any]]


def _ensure_mapping(decoder: str, value: Any) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise DecodeError(decoder, f"{decoder}: expected a top-level object, got {type(value).__name__}")
    return value


def decode_json(data: bytes) -> dict[str, Any]:
    try:
        value = json.loads(data)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DecodeError("json", f"json: {e}") from e
    except RecursionError as e:
        raise DecodeError("json", "json: document nested too deeply") from e
    return _ensure_mapping("json", value)


def decode_yaml(data: bytes) -> dict[str, Any]:
    try:
        value = yaml.safe_load(data)
    except yaml.YAMLError as e:
        # PyYAML messages span several lines; keep the first for the report
        first_line = str(e).strip().splitlines()[0] if str(e).strip() else type(e).__name__
        raise DecodeError("yaml", f"yaml: {first_line}") from e
    except RecursionError as e:
        raise DecodeError("yaml", "yaml: document nested too deeply") from e
    return _ensure_mapping("yaml", value)


__all__ = [
    "Decoder",
    "decode_cyclonedx_xml",
    "decode_json",
    "decode_spdx_tagvalue",
    "decode_yaml",
]
