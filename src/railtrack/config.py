"""
Configuration — typed, validated settings loaded from environment/.env.

Uses pydantic-settings so that every knob the library exposes can be set
without code changes:

  RAILTRACK_LOG_LEVEL=DEBUG
  RAILTRACK_LOG_FORMAT=json
  RAILTRACK_EXECUTION_LOG_LEVEL=INFO
  RAILTRACK_DEFAULT_TIMEOUT_SECONDS=2.5

Settings are read lazily on first use and cached; nothing is read at import.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LEVEL_NAMES = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def normalize_level(value: str) -> str:
    """Upper-case a logging level name, rejecting anything non-standard."""
    normalized = value.strip().upper()
    if normalized not in _LEVEL_NAMES:
        raise ValueError(
            f"Log level must be one of {', '.join(_LEVEL_NAMES)}, got {value!r}"
        )
    return normalized


class RailtrackSettings(BaseSettings):
    """
    Library settings.

    Load order (highest priority first):
      1. Environment variables (RAILTRACK_ prefix)
      2. .env file in the working directory
      3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="RAILTRACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Minimum level for configure_logging()")
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Renderer used by configure_logging()",
    )
    execution_log_level: str = Field(
        default="INFO",
        description="Level LoggingExecutionContext logs start/completion at",
    )
    default_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Timeout applied by with_timeout() when none is given",
    )

    @field_validator("log_level", "execution_log_level")
    @classmethod
    def validate_level(cls, value: str) -> str:
        """Reject anything that is not a standard logging level name."""
        return normalize_level(value)

    def level_number(self, name: str | None = None) -> int:
        """Numeric logging level for `name` (defaults to log_level)."""
        return getattr(logging, (name or self.log_level).upper())


@lru_cache(maxsize=1)
def get_settings() -> RailtrackSettings:
    """Return the process-wide settings, loading them on first call."""
    return RailtrackSettings()


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
