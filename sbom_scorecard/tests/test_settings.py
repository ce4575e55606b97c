import pytest

from sbom_scorecard.settings import Settings, get_settings, load_settings

ENV_NAMES = ("SBOM_SCORECARD_LOG_LEVEL", "SBOM_SCORECARD_OUTPUT_FORMAT", "SBOM_SCORECARD_DEFAULT_FAMILY")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ENV_NAMES:
        # setenv first so values written by load_dotenv are rolled back too
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self) -> None:
        assert load_settings() == Settings(log_level="WARNING", output_format="text", default_family="guess")

    def test_values_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("SBOM_SCORECARD_LOG_LEVEL", "debug")
        monkeypatch.setenv("SBOM_SCORECARD_OUTPUT_FORMAT", "JSON")
        monkeypatch.setenv("SBOM_SCORECARD_DEFAULT_FAMILY", "cdx")

        settings = load_settings()

        assert settings.log_level == "DEBUG"
        assert settings.output_format == "json"
        assert settings.default_family == "cdx"

    def test_blank_value_uses_default(self, monkeypatch) -> None:
        monkeypatch.setenv("SBOM_SCORECARD_OUTPUT_FORMAT", "  ")

        assert load_settings().output_format == "text"

    @pytest.mark.parametrize(
        ("name", "value"),
        [
            ("SBOM_SCORECARD_OUTPUT_FORMAT", "xml"),
            ("SBOM_SCORECARD_DEFAULT_FAMILY", "rdf"),
        ],
    )
    def test_invalid_value_names_variable(self, monkeypatch, name, value) -> None:
        monkeypatch.setenv(name, value)

        with pytest.raises(ValueError, match=name):
            load_settings()

    def test_dotenv_file(self, tmp_path) -> None:
        """A .env file in the working directory seeds unset variables."""
        (tmp_path / ".env").write_text("SBOM_SCORECARD_DEFAULT_FAMILY=spdx\n", encoding="utf-8")

        assert load_settings().default_family == "spdx"

    def test_environment_beats_dotenv(self, tmp_path, monkeypatch) -> None:
        (tmp_path / ".env").write_text("SBOM_SCORECARD_OUTPUT_FORMAT=json\n", encoding="utf-8")
        monkeypatch.setenv("SBOM_SCORECARD_OUTPUT_FORMAT", "text")

        assert load_settings().output_format == "text"

    def test_get_settings_is_cached(self, monkeypatch) -> None:
        first = get_settings()
        monkeypatch.setenv("SBOM_SCORECARD_OUTPUT_FORMAT", "json")

        assert get_settings() is first
