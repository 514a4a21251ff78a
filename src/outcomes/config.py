"""
Configuration — typed, validated settings loaded from environment/.env.

Uses pydantic-settings to:
  - Load from OUTCOMES_* environment variables
  - Fall back to a .env file in the working directory
  - Validate types and constraints when the settings are first read

Only the opt-in layers read these settings (logging setup, execution
contexts, composition patterns). The Outcome core takes no configuration.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class OutcomeSettings(BaseSettings):
    """
    Package settings.

    Load order (highest priority first):
      1. Environment variables (OUTCOMES_LOG_LEVEL, OUTCOMES_RETRY_ATTEMPTS, ...)
      2. .env file
      3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="OUTCOMES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Minimum level for structlog output")

    retry_attempts: int = Field(default=3, ge=1, description="Attempts made by patterns.retry")
    retry_min_wait_seconds: float = Field(default=0.1, ge=0, description="Lower backoff bound")
    retry_max_wait_seconds: float = Field(default=30.0, ge=0, description="Upper backoff bound")

    default_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout used by patterns.with_timeout when none is given",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Reject names the logging module doesn't know."""
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @model_validator(mode="after")
    def check_backoff_bounds(self) -> OutcomeSettings:
        if self.retry_min_wait_seconds > self.retry_max_wait_seconds:
            raise ValueError(
                "retry_min_wait_seconds must not exceed retry_max_wait_seconds "
                f"({self.retry_min_wait_seconds} > {self.retry_max_wait_seconds})"
            )
        return self


@lru_cache(maxsize=1)
def get_settings() -> OutcomeSettings:
    """Return the process-wide settings, loaded once."""
    return OutcomeSettings()
