"""
Environment-based configuration management for Sentinel Notifier.

Uses pydantic-settings to load configuration values from environment
variables and .env files. The notifier service imports its settings from
this module to ensure consistent configuration handling.

All environment variables are prefixed with ``SN_`` to avoid collisions.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from ``SN_``-prefixed environment variables.

    Attributes:
        feishu_webhook_url: Feishu/Lark bot webhook URL (empty = built-in default).
        is_prod: Whether the process runs in production (display only).
        alert_cooldown_s: Seconds during which repeat alerts of one category
                          are dropped after a successful send.
        service_name: Service name bound into every log line.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_json: Render logs as JSON (``False`` = console renderer).
    """

    model_config = SettingsConfigDict(
        env_prefix="SN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Feishu webhook ──
    feishu_webhook_url: str = Field(
        default="",
        description="Feishu/Lark bot webhook URL (empty = built-in default).",
    )
    is_prod: bool = Field(default=False, description="Production environment flag.")

    # ── Rate limiting ──
    alert_cooldown_s: float = Field(
        default=180.0,
        gt=0,
        description="Per-category cooldown window in seconds.",
    )

    # ── Logging ──
    service_name: str = Field(
        default="sentinel-notifier",
        description="Service name bound into log lines.",
    )
    log_level: str = Field(default="INFO", description="Logging level.")
    log_json: bool = Field(default=True, description="Render logs as JSON.")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached application settings singleton.

    Returns:
        The global ``Settings`` instance.
    """
    return Settings()
