"""Tests for Settings."""

import pytest
from cdok.config import DOCS_FILENAME, Settings
from pydantic import ValidationError


class TestSettings:
    def test_defaults(self):
        settings = Settings()

        assert settings.docs_filename == DOCS_FILENAME == ".project_docs.txt"
        assert settings.extensions == (".c", ".h")
        assert settings.max_files == 200
        assert settings.max_functions_per_file == 200
        assert settings.max_parameters == 20
        assert settings.max_parameter_tokens == 10

    def test_frozen(self):
        settings = Settings()
        with pytest.raises(ValidationError):
            settings.max_files = 5

    @pytest.mark.parametrize("field", ["max_files", "max_parameters", "max_parameter_tokens"])
    def test_caps_must_be_positive(self, field):
        with pytest.raises(ValidationError):
            Settings(**{field: 0})

    def test_empty_docs_filename_rejected(self):
        with pytest.raises(ValidationError):
            Settings(docs_filename="")


class TestFromEnv:
    def test_reads_environment(self):
        settings = Settings.from_env(
            {
                "CDOK_DOCS_FILE": "docs.txt",
                "CDOK_MAX_FILES": "12",
                "CDOK_MAX_FUNCTIONS": "7",
                "CDOK_ENCODING": "latin-1",
            }
        )

        assert settings.docs_filename == "docs.txt"
        assert settings.max_files == 12
        assert settings.max_functions_per_file == 7
        assert settings.encoding == "latin-1"
        assert settings.max_parameters == 20

    def test_empty_values_ignored(self):
        assert Settings.from_env({"CDOK_MAX_FILES": ""}).max_files == 200

    def test_overrides_win(self):
        settings = Settings.from_env({"CDOK_DOCS_FILE": "env.txt"}, docs_filename="cli.txt")
        assert settings.docs_filename == "cli.txt"

    def test_none_override_keeps_environment(self):
        settings = Settings.from_env({"CDOK_DOCS_FILE": "env.txt"}, docs_filename=None)
        assert settings.docs_filename == "env.txt"

    def test_invalid_number(self):
        with pytest.raises(ValidationError):
            Settings.from_env({"CDOK_MAX_PARAMETERS": "many"})

    def test_uses_process_environment(self, monkeypatch):
        monkeypatch.setenv("CDOK_MAX_PARAMETER_TOKENS", "4")
        assert Settings.from_env().max_parameter_tokens == 4
