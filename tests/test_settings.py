"""
Tests for environment-backed settings (config.get_settings).
"""

from __future__ import annotations

import logging

import pytest

from backend_vendorrisk.config import Settings, get_settings
from backend_vendorrisk.config.env import get_log_format, get_log_level


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch):
    for var in ("LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(var, raising=False)
    settings = get_settings()
    assert settings == Settings()
    assert settings.log_level_value == logging.INFO
    assert settings.json_logs


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FORMAT", "Console")
    settings = get_settings()
    assert settings.to_dict() == {"log_level": "DEBUG", "log_format": "console"}
    assert settings.log_level_value == logging.DEBUG
    assert not settings.json_logs


def test_settings_are_cached(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    first = get_settings()
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    assert get_settings() is first
    get_settings.cache_clear()
    assert get_settings().log_level == "DEBUG"


def test_invalid_values_fall_back(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    monkeypatch.setenv("LOG_FORMAT", "xml")
    assert get_log_level() == "INFO"
    assert get_log_format() == "json"
