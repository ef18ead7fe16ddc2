"""Tests for environment-based settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from result_pattern.config import LoggingSettings, ResultSettings, clear_settings_cache, get_settings


def test_defaults() -> None:
    settings = ResultSettings()
    assert settings.debug is False
    assert settings.panic_payload is True
    assert settings.logging.level == "WARNING"
    assert settings.logging.format == "console"
    assert settings.logging.colors is None


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()
    first = get_settings()
    clear_settings_cache()
    assert get_settings() is not first


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESULT_PATTERN_DEBUG", "true")
    monkeypatch.setenv("RESULT_PATTERN_PANIC_PAYLOAD", "0")
    monkeypatch.setenv("RESULT_PATTERN_LOG_LEVEL", "debug")
    monkeypatch.setenv("RESULT_PATTERN_LOG_FORMAT", "JSON")

    settings = get_settings()

    assert settings.debug is True
    assert settings.panic_payload is False
    assert settings.logging.level == "DEBUG"
    assert settings.logging.format == "json"


def test_rejects_unknown_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESULT_PATTERN_LOG_LEVEL", "verbose")
    with pytest.raises(ValidationError):
        LoggingSettings()
