"""Tests for family detection and the decoder chain."""

import pytest

from sbom_scorecard.documents.cyclonedx import CycloneDXBom
from sbom_scorecard.documents.spdx import SPDXDocument
from sbom_scorecard.exceptions import (
    DecodeError,
    DocumentParseError,
    DocumentReadError,
    EmptyDocumentError,
)
from sbom_scorecard.ingestion import (
    CYCLONEDX_DECODERS,
    SPDX_DECODERS,
    DecoderSpec,
    detect_family,
    load_document,
    parse_document,
)
from sbom_scorecard.sdk.enums import SBOMFamily

from .factories import (
    CYCLONEDX_XML_SBOM,
    TAG_VALUE_SBOM,
    YAML_SBOM,
    cyclonedx_bom,
    spdx_document,
    spdx_package,
)


def _failing(mocker, name: str, message: str):
    return DecoderSpec(name, mocker.Mock(side_effect=DecodeError(name, message)))


def _returning(mocker, name: str, value: dict):
    return DecoderSpec(name, mocker.Mock(return_value=value))


class TestDecoderChains:
    def test_default_priorities(self) -> None:
        """SPDX tries json, tag-value, yaml; CycloneDX tries json, xml."""
        assert [spec.name for spec in SPDX_DECODERS] == ["json", "tag-value", "yaml"]
        assert [spec.name for spec in CYCLONEDX_DECODERS] == ["json", "xml"]


class TestParseDocument:
    """Tests for the priority-ordered dispatcher."""

    def test_falls_through_to_third_decoder(self, mocker) -> None:
        """The first two decoders fail and the third one wins."""
        chain = [
            _failing(mocker, "first", "first: bad"),
            _failing(mocker, "second", "second: bad"),
            _returning(mocker, "third", spdx_document(packages=[spdx_package()])),
        ]

        document, decoder = parse_document(b"data", SBOMFamily.SPDX, chain)

        assert decoder == "third"
        assert isinstance(document, SPDXDocument)
        assert len(document.packages) == 1
        for spec in chain:
            spec.decode.assert_called_once_with(b"data")

    def test_stops_at_first_success(self, mocker) -> None:
        chain = [
            _returning(mocker, "first", spdx_document(packages=[spdx_package()])),
            _failing(mocker, "second", "second: bad"),
        ]

        _, decoder = parse_document(b"data", SBOMFamily.SPDX, chain)

        assert decoder == "first"
        chain[1].decode.assert_not_called()

    def test_reports_last_decoder_error(self, mocker) -> None:
        """When every decoder fails, the last decoder's message is surfaced."""
        chain = [
            _failing(mocker, "first", "first: bad"),
            _failing(mocker, "second", "second: bad"),
            _failing(mocker, "third", "third: worst"),
        ]

        with pytest.raises(DocumentParseError) as excinfo:
            parse_document(b"data", SBOMFamily.SPDX, chain)

        assert str(excinfo.value) == "third: worst"
        assert excinfo.value.decoder == "third"

    def test_empty_parse_continues_chain(self, mocker) -> None:
        """An empty parse does not stop later decoders from succeeding."""
        chain = [
            _returning(mocker, "first", {"unrelated": "value"}),
            _returning(mocker, "second", spdx_document(packages=[spdx_package()])),
        ]

        _, decoder = parse_document(b"data", SBOMFamily.SPDX, chain)

        assert decoder == "second"

    def test_empty_parse_preferred_over_later_failure(self, mocker) -> None:
        chain = [
            _returning(mocker, "first", {}),
            _failing(mocker, "second", "second: bad"),
        ]

        with pytest.raises(EmptyDocumentError) as excinfo:
            parse_document(b"data", SBOMFamily.SPDX, chain)

        assert str(excinfo.value) == "Parsed the file, but was unable to find an SBOM in it"
        assert excinfo.value.decoder == "first"

    def test_validation_failure_counts_as_decoder_failure(self, mocker) -> None:
        """A pydantic validation error becomes a concise decoder error."""
        chain = [_returning(mocker, "custom", {"spdxVersion": "SPDX-2.3", "packages": "not a list"})]

        with pytest.raises(DocumentParseError) as excinfo:
            parse_document(b"data", SBOMFamily.SPDX, chain)

        assert str(excinfo.value).startswith("custom: packages")

    def test_cyclonedx_model(self, mocker) -> None:
        chain = [_returning(mocker, "json", cyclonedx_bom())]

        document, _ = parse_document(b"data", SBOMFamily.CYCLONEDX, chain)

        assert isinstance(document, CycloneDXBom)

    def test_empty_chain(self) -> None:
        with pytest.raises(DocumentParseError, match="No decoders configured for spdx"):
            parse_document(b"data", SBOMFamily.SPDX, [])


class TestDetectFamily:
    def test_spdx_json(self) -> None:
        assert detect_family(b'{"spdxVersion": "SPDX-2.3"}') == SBOMFamily.SPDX

    def test_cyclonedx_json(self) -> None:
        assert detect_family(b'{"bomFormat": "CycloneDX", "specVersion": "1.5"}') == SBOMFamily.CYCLONEDX

    def test_cyclonedx_json_without_bom_format(self) -> None:
        assert detect_family(b'{"specVersion": "1.4", "components": []}') == SBOMFamily.CYCLONEDX

    def test_cyclonedx_xml(self) -> None:
        assert detect_family(CYCLONEDX_XML_SBOM.encode()) == SBOMFamily.CYCLONEDX

    def test_falls_back_to_spdx(self) -> None:
        """Tag-value, YAML and unknown input go to the SPDX chain."""
        assert detect_family(TAG_VALUE_SBOM.encode()) == SBOMFamily.SPDX
        assert detect_family(YAML_SBOM.encode()) == SBOMFamily.SPDX
        assert detect_family(b"not an sbom at all") == SBOMFamily.SPDX


class TestLoadDocument:
    """End-to-end loads from files on disk."""

    def test_spdx_json(self, write_sbom) -> None:
        result = load_document(write_sbom(spdx_document(packages=[spdx_package()])))

        assert result.ok
        assert result.family == SBOMFamily.SPDX
        assert result.decoder == "json"
        assert result.error is None

    def test_spdx_tag_value(self, write_sbom) -> None:
        result = load_document(write_sbom(TAG_VALUE_SBOM, name="sbom.spdx"))

        assert result.ok
        assert result.decoder == "tag-value"
        assert [package.name for package in result.document.packages] == ["alpha", "beta"]

    def test_spdx_yaml(self, write_sbom) -> None:
        """YAML is reached after the tag-value decoder rejects the list syntax."""
        result = load_document(write_sbom(YAML_SBOM, name="sbom.spdx.yaml"))

        assert result.ok
        assert result.decoder == "yaml"
        assert result.document.packages[0].versionInfo == "2.1.0"
        assert result.document.creationInfo.created.startswith("2023-01-01T00:00:00")

    def test_cyclonedx_json(self, write_sbom) -> None:
        result = load_document(write_sbom(cyclonedx_bom(components=[{"type": "library", "name": "x"}])))

        assert result.ok
        assert result.family == SBOMFamily.CYCLONEDX
        assert result.decoder == "json"

    def test_cyclonedx_xml(self, write_sbom) -> None:
        result = load_document(write_sbom(CYCLONEDX_XML_SBOM, name="bom.xml"))

        assert result.ok
        assert result.family == SBOMFamily.CYCLONEDX
        assert result.decoder == "xml"
        assert result.document.specVersion == "1.4"

    def test_garbage_reports_last_decoder(self, write_sbom) -> None:
        """Unparseable text reports the YAML decoder, the last in the SPDX chain."""
        result = load_document(write_sbom("this is not an sbom", name="notes.txt"))

        assert not result.ok
        assert isinstance(result.error, DocumentParseError)
        assert result.error.decoder == "yaml"
        assert str(result.error).startswith("yaml:")

    def test_unrelated_json_is_empty(self, write_sbom) -> None:
        result = load_document(write_sbom({"foo": "bar"}))

        assert isinstance(result.error, EmptyDocumentError)
        assert result.document is None

    def test_explicit_family_mismatch(self, write_sbom) -> None:
        """An SPDX file forced through the CycloneDX chain is empty, not a crash."""
        result = load_document(write_sbom(spdx_document(packages=[spdx_package()])), SBOMFamily.CYCLONEDX)

        assert result.family == SBOMFamily.CYCLONEDX
        assert isinstance(result.error, EmptyDocumentError)

    def test_invalid_cyclonedx_reports_xml(self, write_sbom) -> None:
        result = load_document(write_sbom({"bomFormat": "CycloneDX", "components": "oops"}))

        assert result.family == SBOMFamily.CYCLONEDX
        assert isinstance(result.error, DocumentParseError)
        assert str(result.error).startswith("xml:")

    def test_missing_file(self, tmp_path) -> None:
        result = load_document(tmp_path / "missing.json")

        assert isinstance(result.error, DocumentReadError)
        assert str(result.error).startswith("opening SBOM document:")
        assert result.family is None

    def test_decoder_override(self, mocker, write_sbom) -> None:
        path = write_sbom("ignored")
        chain = [_returning(mocker, "fake", spdx_document(packages=[spdx_package()]))]

        result = load_document(path, SBOMFamily.SPDX, decoders=chain)

        assert result.ok
        assert result.decoder == "fake"
        chain[0].decode.assert_called_once_with(b"ignored")

    def test_deeply_nested_json_is_a_load_error(self, write_sbom) -> None:
        """Input that exhausts the recursion limit degrades instead of raising."""
        result = load_document(write_sbom(b"[" * 100000 + b"]" * 100000))

        assert result.family == SBOMFamily.SPDX
        assert isinstance(result.error, DocumentParseError)
        assert result.error.decoder == "yaml"

    def test_unknown_xml_encoding_is_a_load_error(self, write_sbom) -> None:
        xml = b'<?xml version="1.0" encoding="x-bogus"?><bom xmlns="http://cyclonedx.org/schema/bom/1.4"/>'

        result = load_document(write_sbom(xml, name="bom.xml"))

        assert result.family == SBOMFamily.CYCLONEDX
        assert isinstance(result.error, DocumentParseError)
        assert str(result.error).startswith("xml:")
