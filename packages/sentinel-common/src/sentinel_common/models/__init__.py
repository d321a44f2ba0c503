"""
Shared Pydantic data models for Sentinel Notifier.

This package contains the alert records accepted by the notifiers:
business alerts and RPC/HTTP panic reports.
"""

from sentinel_common.models.alert import (
    AlertCategory,
    AlertRecord,
    HTTPPanicRecord,
    MetricValue,
    PanicRecord,
    Severity,
)

__all__ = [
    "AlertCategory",
    "AlertRecord",
    "HTTPPanicRecord",
    "MetricValue",
    "PanicRecord",
    "Severity",
]
