"""Typed smoke tests for the settings loader.

These tests verify four guarantees:
1) Importing the module-level `settings` yields a `Settings` instance.
2) Environment variables override defaults after clearing the loader cache.
3) `get_logger()` respects the configured LOG_LEVEL when constructing loggers.
4) Service settings used by the submission client are read from the env.
"""

from __future__ import annotations

import logging
from typing import Any

from pipecanvas.core.settings import (
    Settings,
    get_logger,
    load_settings,
    settings,
)


def test_settings_instance_type() -> None:
    """`settings` should be an instance of the typed `Settings` model."""
    assert isinstance(settings, Settings)


def test_env_overrides_with_cache_clear(monkeypatch: Any) -> None:
    """Changing env vars should take effect after `load_settings.cache_clear()`."""
    monkeypatch.setenv("PIPECANVAS_ENV", "test")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    load_settings.cache_clear()
    s = load_settings()

    assert s.environment == "test"
    assert s.is_test and not s.is_prod
    assert s.log_level == "DEBUG"
    load_settings.cache_clear()


def test_service_settings_from_env(monkeypatch: Any) -> None:
    """Service URL and timeout map from their PIPECANVAS_* variables."""
    monkeypatch.setenv("PIPECANVAS_SERVICE_URL", "http://parse.example:9000")
    monkeypatch.setenv("PIPECANVAS_TIMEOUT_SECONDS", "2.5")

    load_settings.cache_clear()
    s = load_settings()

    assert s.service_url == "http://parse.example:9000"
    assert s.timeout_seconds == 2.5
    load_settings.cache_clear()


def test_get_logger_respects_level(monkeypatch: Any) -> None:
    """`get_logger()` should apply the numeric level derived from `LOG_LEVEL`.

    A unique logger name avoids side effects between tests.
    """
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    load_settings.cache_clear()

    logger = get_logger("pipecanvas.tests.settings")

    assert logger.level == logging.ERROR
    assert logger.handlers, "Expected at least one StreamHandler to be attached."
    load_settings.cache_clear()


def test_cors_origins_accept_comma_separated_env(monkeypatch: Any) -> None:
    """PIPECANVAS_CORS_ORIGINS is a plain comma-separated list, not JSON."""
    monkeypatch.setenv("PIPECANVAS_CORS_ORIGINS", "http://a.example, http://b.example,")

    load_settings.cache_clear()
    s = load_settings()

    assert s.cors_origins == ["http://a.example", "http://b.example"]
    load_settings.cache_clear()


def test_cors_origins_default() -> None:
    assert "http://localhost:3000" in Settings().cors_origins
