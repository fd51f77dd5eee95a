"""Settings for tempus applications.

The function library itself is configuration-free; settings only shape how
an application embeds it (the bundled CLI in particular): log level and
format, a pinned clock for reproducible evaluation, and the default pattern
used to render timestamps.

Features:
    - **TempusSettings:** pydantic-settings model, ``TEMPUS_`` env prefix
    - **.env file support:** Automatic loading via pydantic-settings
    - **Extra ignore:** Unknown env vars don't cause startup failures
    - **get_settings():** Cached, validated instance

Examples:
    >>> import os
    >>> os.environ["TEMPUS_FIXED_NOW"] = "2023-06-15T10:20:30Z"
    >>> get_settings(_force_reload=True).fixed_now
    '2023-06-15T10:20:30Z'

Tags:
    settings, configuration, pydantic, environment, tempus

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

import logging

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tempus.core.errors import ConfigError
from tempus.core.timestamps import from_iso8601


class TempusSettings(BaseSettings):
    """Tempus configuration.

    All fields can be set via ``TEMPUS_*`` environment variables (e.g.
    ``TEMPUS_LOG_LEVEL=DEBUG``) or through a ``.env`` file.

    Fields
    ──────
    log_level      : structlog log level
    log_json       : JSON logs (True), console logs (False), auto-detect (None)
    fixed_now      : ISO 8601 instant the clock is pinned to, if any
    format_pattern : strftime-style pattern for rendering timestamps
    """

    model_config = SettingsConfigDict(
        env_prefix="TEMPUS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="WARNING")
    log_json: bool | None = Field(default=None)

    # ── Clock ────────────────────────────────────────────────────
    fixed_now: str | None = Field(
        default=None,
        description="Pin the clock to this ISO 8601 instant",
    )

    # ── Rendering ────────────────────────────────────────────────
    format_pattern: str = Field(default="%+")

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @field_validator("fixed_now")
    @classmethod
    def _validate_fixed_now(cls, value: str | None) -> str | None:
        if value is not None:
            from_iso8601(value)
        return value

    @property
    def fixed_now_nanos(self) -> int | None:
        """``fixed_now`` as epoch nanoseconds."""
        if self.fixed_now is None:
            return None
        return from_iso8601(self.fixed_now)


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: dict[str, TempusSettings] = {}


def get_settings(*, _force_reload: bool = False) -> TempusSettings:
    """
    Load, validate, and cache a :class:`TempusSettings` instance.

    Raises:
        ConfigError: If a TEMPUS_* variable fails validation.
    """
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]
    try:
        settings = TempusSettings()
    except ValidationError as e:
        raise ConfigError(f"Invalid tempus configuration: {e}", cause=e) from e
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()


__all__ = [
    "TempusSettings",
    "get_settings",
    "clear_settings_cache",
]
