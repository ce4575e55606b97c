"""Decoder for CycloneDX 1.x XML BOMs.

Converts the namespaced XML tree into the CycloneDX JSON shape so it can be
validated by the same model as JSON input.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Any

from ..exceptions import DecodeError

CYCLONEDX_NAMESPACE_PREFIX = "http://cyclonedx.org/schema/bom/"


def _split_tag(tag: str) -> tuple[str, str]:
    if tag.startswith("{"):
        namespace, local = tag[1:].split("}", 1)
        return namespace, local
    return "", tag


def _local(element: ET.Element) -> str:
    return _split_tag(element.tag)[1]


def _child(element: ET.Element, name: str) -> ET.Element | None:
    for child in element:
        if _local(child) == name:
            return child
    return None


def _children(element: ET.Element | None, name: str) -> list[ET.Element]:
    if element is None:
        return []
    return [child for child in element if _local(child) == name]


def _text(element: ET.Element, name: str) -> str:
    child = _child(element, name)
    if child is None or child.text is None:
        return ""
    return child.text.strip()


def _licenses(element: ET.Element) -> list[dict[str, Any]]:
    entries: list[dict[str, Any]] = []
    licenses = _child(element, "licenses")
    if licenses is None:
        return entries
    for entry in licenses:
        kind = _local(entry)
        ack = entry.get("acknowledgement", "")
        if kind == "expression" and entry.text:
            entries.append({"expression": entry.text.strip(), "acknowledgement": ack})
        elif kind == "license":
            entries.append({"license": {"id": _text(entry, "id"), "name": _text(entry, "name"), "acknowledgement": ack}})
    return entries


def _component(element: ET.Element) -> dict[str, Any]:
    component: dict[str, Any] = {
        "type": element.get("type", ""),
        "bom-ref": element.get("bom-ref", ""),
        "group": _text(element, "group"),
        "name": _text(element, "name"),
        "version": _text(element, "version"),
        "purl": _text(element, "purl"),
        "cpe": _text(element, "cpe"),
        "hashes": [
            {"alg": hash_el.get("alg", ""), "content": (hash_el.text or "").strip()}
            for hash_el in _children(_child(element, "hashes"), "hash")
        ],
        "licenses": _licenses(element),
        "components": [_component(child) for child in _children(_child(element, "components"), "component")],
    }
    swid = _child(element, "swid")
    if swid is not None:
        component["swid"] = {"tagId": swid.get("tagId", ""), "name": swid.get("name", "")}
    return component


def _tools(tools: ET.Element | None) -> list[dict[str, Any]]:
    if tools is None:
        return []
    result = [
        {"vendor": _text(tool, "vendor"), "name": _text(tool, "name"), "version": _text(tool, "version")}
        for tool in _children(tools, "tool")
    ]
    for kind, tag in (("components", "component"), ("services", "service")):
        for entry in _children(_child(tools, kind), tag):
            vendor = _text(entry, "group") or _text(entry, "publisher")
            for org_tag in ("provider", "supplier", "manufacturer"):
                org = _child(entry, org_tag)
                if not vendor and org is not None:
                    vendor = _text(org, "name")
            result.append({"vendor": vendor, "name": _text(entry, "name"), "version": _text(entry, "version")})
    return result


def _organization(element: ET.Element, name: str) -> dict[str, Any] | None:
    org = _child(element, name)
    if org is None:
        return None
    return {"name": _text(org, "name")}


def _metadata(element: ET.Element) -> dict[str, Any]:
    metadata: dict[str, Any] = {
        "timestamp": _text(element, "timestamp"),
        "tools": _tools(_child(element, "tools")),
        "authors": [
            {"name": _text(author, "name"), "email": _text(author, "email")}
            for author in _children(_child(element, "authors"), "author")
        ],
        "manufacture": _organization(element, "manufacture"),
        "supplier": _organization(element, "supplier"),
    }
    component = _child(element, "component")
    if component is not None:
        metadata["component"] = _component(component)
    return metadata


def decode_cyclonedx_xml(data: bytes) -> dict[str, Any]:
    """Decode CycloneDX XML bytes into a CycloneDX JSON-shaped dictionary.

    Raises:
        DecodeError: If the bytes are not well-formed XML, declare an unknown
            encoding, nest too deeply, or the root element is not a CycloneDX
            ``bom``.
    """
    try:
        root = ET.fromstring(data)
    except (ET.ParseError, LookupError, ValueError) as e:
        # expat reports an unknown prolog encoding as LookupError
        raise DecodeError("xml", f"xml: {e}") from e

    namespace, local = _split_tag(root.tag)
    if local != "bom" or not namespace.startswith(CYCLONEDX_NAMESPACE_PREFIX):
        raise DecodeError("xml", f"xml: root element {root.tag!r} is not a CycloneDX bom")

    try:
        bom: dict[str, Any] = {
            "bomFormat": "CycloneDX",
            "specVersion": namespace[len(CYCLONEDX_NAMESPACE_PREFIX) :],
            "serialNumber": root.get("serialNumber", ""),
            "components": [_component(child) for child in _children(_child(root, "components"), "component")],
        }
        metadata = _child(root, "metadata")
        if metadata is not None:
            bom["metadata"] = _metadata(metadata)
    except RecursionError as e:
        raise DecodeError("xml", "xml: components nested too deeply") from e
    return bom
