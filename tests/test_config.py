"""Tests for OutcomeSettings and get_settings()."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from outcomes import OutcomeSettings, get_settings


class TestDefaults:
    def test_default_values(self, monkeypatch):
        for name in (
            "OUTCOMES_LOG_LEVEL",
            "OUTCOMES_RETRY_ATTEMPTS",
            "OUTCOMES_RETRY_MIN_WAIT_SECONDS",
            "OUTCOMES_RETRY_MAX_WAIT_SECONDS",
            "OUTCOMES_DEFAULT_TIMEOUT_SECONDS",
        ):
            monkeypatch.delenv(name, raising=False)
        settings = OutcomeSettings(_env_file=None)
        assert settings.log_level == "INFO"
        assert settings.retry_attempts == 3
        assert settings.retry_min_wait_seconds == 0.1
        assert settings.retry_max_wait_seconds == 30.0
        assert settings.default_timeout_seconds == 30.0


class TestEnvironmentOverrides:
    def test_reads_prefixed_variables(self, monkeypatch):
        monkeypatch.setenv("OUTCOMES_LOG_LEVEL", "debug")
        monkeypatch.setenv("OUTCOMES_RETRY_ATTEMPTS", "7")
        monkeypatch.setenv("OUTCOMES_DEFAULT_TIMEOUT_SECONDS", "2.5")
        settings = OutcomeSettings(_env_file=None)
        assert settings.log_level == "DEBUG"
        assert settings.retry_attempts == 7
        assert settings.default_timeout_seconds == 2.5

    def test_unprefixed_variables_are_ignored(self, monkeypatch):
        monkeypatch.delenv("OUTCOMES_LOG_LEVEL", raising=False)
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        assert OutcomeSettings(_env_file=None).log_level == "INFO"


class TestValidation:
    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError, match="Unknown log level"):
            OutcomeSettings(_env_file=None, log_level="LOUD")

    def test_zero_attempts_rejected(self):
        with pytest.raises(ValidationError):
            OutcomeSettings(_env_file=None, retry_attempts=0)

    def test_non_positive_timeout_rejected(self):
        with pytest.raises(ValidationError):
            OutcomeSettings(_env_file=None, default_timeout_seconds=0)

    def test_min_wait_above_max_wait_rejected(self):
        with pytest.raises(ValidationError, match="must not exceed"):
            OutcomeSettings(_env_file=None, retry_min_wait_seconds=5, retry_max_wait_seconds=1)


class TestGetSettings:
    def test_cached(self):
        assert get_settings() is get_settings()

    def test_cache_clear_reloads(self, monkeypatch):
        monkeypatch.setenv("OUTCOMES_RETRY_ATTEMPTS", "2")
        first = get_settings()
        monkeypatch.setenv("OUTCOMES_RETRY_ATTEMPTS", "9")
        assert get_settings().retry_attempts == 2
        get_settings.cache_clear()
        assert get_settings() is not first
        assert get_settings().retry_attempts == 9
