"""
Unit tests for settings loading.

Tests cover:
- Defaults
- COLLABSHEETS_* environment overrides
- Validation of window size and log level
- Building a service from settings
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from collabsheets.config import Settings
from collabsheets.service import CollaborationService


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in (
        "COLLABSHEETS_LOG_FILE",
        "COLLABSHEETS_LOG_LEVEL",
        "COLLABSHEETS_VIEW_ROWS",
        "COLLABSHEETS_VIEW_COLS",
        "COLLABSHEETS_ACCESS_CONTROL",
    ):
        monkeypatch.delenv(var, raising=False)


class TestSettings:
    """Test suite for Settings."""

    def test_defaults(self):
        settings = Settings()
        assert settings.log_file == Path("collaborative_system.log")
        assert settings.log_level == "INFO"
        assert (settings.view_rows, settings.view_cols) == (3, 3)
        assert settings.access_control is False

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("COLLABSHEETS_LOG_FILE", str(tmp_path / "x.log"))
        monkeypatch.setenv("COLLABSHEETS_VIEW_ROWS", "5")
        monkeypatch.setenv("COLLABSHEETS_ACCESS_CONTROL", "true")

        settings = Settings()

        assert settings.log_file == tmp_path / "x.log"
        assert settings.view_rows == 5
        assert settings.access_control is True

    def test_empty_log_file_disables_file(self, monkeypatch):
        monkeypatch.setenv("COLLABSHEETS_LOG_FILE", "")
        assert Settings().log_file is None

    def test_log_level_is_normalised(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(log_level="chatty")

    def test_window_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(view_rows=0)


class TestFromSettings:
    """Test suite for CollaborationService.from_settings."""

    def test_open_by_default(self):
        service = CollaborationService.from_settings(Settings(log_file=""))
        assert not service.access_control_enabled
        assert service.diagnostics.path is None

    def test_restricted_when_configured(self, tmp_path):
        settings = Settings(log_file=str(tmp_path / "s.log"), access_control=True)
        service = CollaborationService.from_settings(settings)
        assert service.access_control_enabled
        assert service.diagnostics.path == tmp_path / "s.log"
