"""Tests for tempus.core.settings module."""

import pytest
from pydantic import ValidationError

from tempus.core.errors import ConfigError, ErrorCategory
from tempus.core.settings import TempusSettings, clear_settings_cache, get_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("TEMPUS_LOG_LEVEL", "TEMPUS_LOG_JSON", "TEMPUS_FIXED_NOW", "TEMPUS_FORMAT_PATTERN"):
        monkeypatch.delenv(name, raising=False)


class TestTempusSettings:
    """Tests for TempusSettings fields and validation."""

    def test_defaults(self):
        settings = TempusSettings(_env_file=None)
        assert settings.log_level == "WARNING"
        assert settings.log_json is None
        assert settings.fixed_now is None
        assert settings.fixed_now_nanos is None
        assert settings.format_pattern == "%+"

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("TEMPUS_FORMAT_PATTERN", "%Y")
        monkeypatch.setenv("TEMPUS_LOG_JSON", "true")
        settings = TempusSettings(_env_file=None)
        assert settings.format_pattern == "%Y"
        assert settings.log_json is True

    def test_log_level_normalised(self, monkeypatch):
        monkeypatch.setenv("TEMPUS_LOG_LEVEL", "debug")
        assert TempusSettings(_env_file=None).log_level == "DEBUG"

    def test_unknown_log_level_rejected(self, monkeypatch):
        monkeypatch.setenv("TEMPUS_LOG_LEVEL", "chatty")
        with pytest.raises(ValidationError):
            TempusSettings(_env_file=None)

    def test_fixed_now(self, monkeypatch):
        monkeypatch.setenv("TEMPUS_FIXED_NOW", "2023-06-15T10:20:30Z")
        settings = TempusSettings(_env_file=None)
        assert settings.fixed_now_nanos == 1_686_824_430_000_000_000

    def test_invalid_fixed_now_rejected(self, monkeypatch):
        monkeypatch.setenv("TEMPUS_FIXED_NOW", "yesterday")
        with pytest.raises(ValidationError):
            TempusSettings(_env_file=None)

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("TEMPUS_FORMAT_PATTERN=%F\n")
        assert TempusSettings(_env_file=env_file).format_pattern == "%F"


class TestGetSettings:
    """Tests for the cached settings factory."""

    def test_cached(self):
        assert get_settings() is get_settings()

    def test_force_reload(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("TEMPUS_FORMAT_PATTERN", "%s")
        second = get_settings(_force_reload=True)
        assert second is not first
        assert second.format_pattern == "%s"

    def test_clear_cache(self):
        first = get_settings()
        clear_settings_cache()
        assert get_settings() is not first

    def test_invalid_env_raises_config_error(self, monkeypatch):
        monkeypatch.setenv("TEMPUS_LOG_LEVEL", "chatty")
        with pytest.raises(ConfigError) as exc_info:
            get_settings()
        assert exc_info.value.category == ErrorCategory.CONFIG
        assert isinstance(exc_info.value.cause, ValidationError)

    def test_failed_load_not_cached(self, monkeypatch):
        monkeypatch.setenv("TEMPUS_LOG_LEVEL", "chatty")
        with pytest.raises(ConfigError):
            get_settings()
        monkeypatch.setenv("TEMPUS_LOG_LEVEL", "info")
        assert get_settings().log_level == "INFO"
