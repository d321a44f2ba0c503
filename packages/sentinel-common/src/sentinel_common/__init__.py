"""
sentinel-common: Shared library for Sentinel Notifier.

Provides the alert data models, configuration management, structured
logging and Prometheus metrics helpers used by the notifier service.
"""

from sentinel_common.config import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
