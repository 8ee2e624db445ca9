"""Unit tests for hash_engine.config."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from hash_engine.config import Settings, load_settings
from hash_engine.projections.render import OutputForm

# ---------------------------------------------------------------------------
# Settings - default values
# ---------------------------------------------------------------------------


class TestSettingsDefaults:
    def test_default_format(self):
        assert Settings().default_format == OutputForm.TARGETS

    def test_default_include_removed(self):
        assert Settings().include_removed is False

    def test_default_json_indent(self):
        assert Settings().json_indent == 2

    def test_default_targets_pattern(self):
        assert Settings().default_targets_pattern == "//..."

    def test_default_logging(self):
        settings = Settings()
        assert settings.verbose is False
        assert settings.structured_logging is False

    def test_default_metrics_file(self):
        assert Settings().metrics_file is None


# ---------------------------------------------------------------------------
# Settings - environment
# ---------------------------------------------------------------------------


class TestSettingsFromEnv:
    def test_format_from_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("HASHDIFF_DEFAULT_FORMAT", " Summary ")
        assert Settings().default_format == OutputForm.SUMMARY

    def test_bool_from_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("HASHDIFF_INCLUDE_REMOVED", "true")
        assert Settings().include_removed is True

    def test_metrics_file_from_env(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        monkeypatch.setenv("HASHDIFF_METRICS_FILE", str(tmp_path / "m.jsonl"))
        assert Settings().metrics_file == tmp_path / "m.jsonl"

    def test_invalid_format_rejected(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("HASHDIFF_DEFAULT_FORMAT", "xml")
        with pytest.raises(ValidationError):
            Settings()


# ---------------------------------------------------------------------------
# load_settings
# ---------------------------------------------------------------------------


class TestLoadSettings:
    def test_overrides(self):
        settings = load_settings(default_format="json", json_indent=4)
        assert settings.default_format == OutputForm.JSON
        assert settings.json_indent == 4

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            load_settings(debug=True)

    def test_negative_indent_rejected(self):
        with pytest.raises(ValidationError):
            load_settings(json_indent=-1)
