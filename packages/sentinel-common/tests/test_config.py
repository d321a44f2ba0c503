"""
Tests for sentinel-common configuration module.

Validates that environment-based configuration loading, default values,
and validation constraints work correctly via pydantic-settings.
"""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from sentinel_common.config import Settings, get_settings


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _clear_settings_cache() -> None:
    """Reset the ``get_settings`` lru_cache between tests."""
    get_settings.cache_clear()


def _clean_env() -> dict[str, str]:
    """Environment without SN_ variables so Settings reads only defaults."""
    return {k: v for k, v in os.environ.items() if not k.startswith("SN_")}


# ---------------------------------------------------------------------------
# Tests: default values
# ---------------------------------------------------------------------------


class TestSettingsDefaults:
    """Verify that ``Settings`` populates sane defaults when no env vars are set."""

    def test_default_webhook_url_is_empty(self) -> None:
        with patch.dict(os.environ, _clean_env(), clear=True):
            assert Settings(_env_file=None).feishu_webhook_url == ""

    def test_default_not_prod(self) -> None:
        with patch.dict(os.environ, _clean_env(), clear=True):
            assert Settings(_env_file=None).is_prod is False

    def test_default_cooldown_three_minutes(self) -> None:
        with patch.dict(os.environ, _clean_env(), clear=True):
            assert Settings(_env_file=None).alert_cooldown_s == 180.0

    def test_default_log_settings(self) -> None:
        with patch.dict(os.environ, _clean_env(), clear=True):
            s = Settings(_env_file=None)
        assert s.log_level == "INFO"
        assert s.log_json is True
        assert s.service_name == "sentinel-notifier"


# ---------------------------------------------------------------------------
# Tests: environment variable overrides
# ---------------------------------------------------------------------------


class TestSettingsFromEnv:
    """Verify that env vars with SN_ prefix override defaults."""

    def test_override_webhook_url(self) -> None:
        with patch.dict(os.environ, {"SN_FEISHU_WEBHOOK_URL": "https://example.com/hook/abc"}):
            s = Settings()
        assert s.feishu_webhook_url == "https://example.com/hook/abc"

    def test_override_is_prod(self) -> None:
        with patch.dict(os.environ, {"SN_IS_PROD": "true"}):
            assert Settings().is_prod is True

    def test_override_cooldown(self) -> None:
        with patch.dict(os.environ, {"SN_ALERT_COOLDOWN_S": "30"}):
            assert Settings().alert_cooldown_s == pytest.approx(30.0)

    def test_override_log_level(self) -> None:
        with patch.dict(os.environ, {"SN_LOG_LEVEL": "DEBUG"}):
            assert Settings().log_level == "DEBUG"


# ---------------------------------------------------------------------------
# Tests: validation constraints
# ---------------------------------------------------------------------------


class TestSettingsValidation:
    """Verify pydantic validators on ``Settings`` fields."""

    def test_cooldown_zero(self) -> None:
        with pytest.raises(ValidationError):
            Settings(alert_cooldown_s=0)  # type: ignore[call-arg]

    def test_cooldown_negative(self) -> None:
        with pytest.raises(ValidationError):
            Settings(alert_cooldown_s=-5)  # type: ignore[call-arg]


# ---------------------------------------------------------------------------
# Tests: get_settings singleton
# ---------------------------------------------------------------------------


class TestGetSettings:
    """Verify the cached ``get_settings()`` helper."""

    def setup_method(self) -> None:
        _clear_settings_cache()

    def teardown_method(self) -> None:
        _clear_settings_cache()

    def test_returns_settings_instance(self) -> None:
        assert isinstance(get_settings(), Settings)

    def test_cached(self) -> None:
        assert get_settings() is get_settings()
