import logging

import pytest

from sbom_scorecard.logging import build_log_context, configure_logging, getLogger, log_event


class TestGetLogger:
    def test_package_hierarchy(self) -> None:
        assert getLogger().name == "sbom_scorecard"
        assert getLogger("sbom_scorecard.ingestion").name == "sbom_scorecard.ingestion"
        assert getLogger("plugins").name == "sbom_scorecard.plugins"


class TestConfigureLogging:
    """Tests for the package log handler setup."""

    def test_single_handler_on_repeat_calls(self) -> None:
        configure_logging()
        logger = configure_logging(level="INFO")

        assert len(logger.handlers) == 1
        assert logger.level == logging.INFO
        assert not logger.propagate

    def test_verbose_wins(self) -> None:
        assert configure_logging(verbose=True, level="ERROR").level == logging.DEBUG

    def test_unknown_level(self) -> None:
        with pytest.raises(ValueError, match="Unknown log level: LOUD"):
            configure_logging(level="LOUD")


class TestLogEvent:
    def test_drops_none_values(self) -> None:
        assert build_log_context(path="a.json", decoder=None) == {"path": "a.json"}

    def test_message_and_extra(self, mocker) -> None:
        logger = getLogger("test")
        log = mocker.patch.object(logger, "log")

        log_event(logger, logging.INFO, "[ingestion] loaded SBOM", path="a.json", decoder="json", error=None)

        log.assert_called_once_with(
            logging.INFO,
            "[ingestion] loaded SBOM path=a.json decoder=json",
            extra={"context": {"path": "a.json", "decoder": "json"}},
        )
