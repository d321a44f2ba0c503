"""
Alert record models for Sentinel Notifier.

Defines the immutable Pydantic records handed to the rate-limited
notifiers: business alerts keyed by category, and the two panic shapes
(RPC and HTTP) that carry a raw stack trace instead of metrics.
"""

from __future__ import annotations

import enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field

MetricValue = Union[str, int, float, bool, list[str]]
"""Scalar (or list of strings) accepted as a business-alert metric."""


class AlertCategory(str, enum.Enum):
    """Business alert category; the rate-limit key for business alerts."""

    RATE_LIMIT = "rate_limit"
    SMS_QUOTA = "sms_quota"
    SLOW_REQUEST = "slow_request"
    HIGH_ERROR = "high_error"
    RESOURCE = "resource"
    CUSTOM = "custom"

    @property
    def label(self) -> str:
        """Human-readable label shown in rendered messages."""
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS: dict[AlertCategory, str] = {
    AlertCategory.RATE_LIMIT: "Rate limit",
    AlertCategory.SMS_QUOTA: "SMS quota exceeded",
    AlertCategory.SLOW_REQUEST: "Slow request",
    AlertCategory.HIGH_ERROR: "High error rate",
    AlertCategory.RESOURCE: "Resource shortage",
    AlertCategory.CUSTOM: "Custom",
}


class Severity(str, enum.Enum):
    """Known alert severity levels (display only)."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AlertRecord(BaseModel):
    """One business alert occurrence.

    Attributes:
        category: Alert category; independent cooldown per value.
        title: Short headline.
        description: Free-text details (optional).
        origin: Name of the service raising the alert.
        subject: Related method or endpoint (optional).
        severity: ``low``/``medium``/``high``/``critical``; any other
                  string is accepted and rendered with the generic glyph.
        metrics: Related measurements, rendered as ``key: value`` pairs.
    """

    model_config = ConfigDict(frozen=True)

    category: AlertCategory = Field(..., description="Alert category.")
    title: str = Field(..., description="Short headline.")
    description: str = Field(default="", description="Free-text details.")
    origin: str = Field(..., description="Originating service name.")
    subject: str = Field(default="", description="Related method or endpoint.")
    severity: str = Field(default="", description="Severity label.")
    metrics: dict[str, MetricValue] = Field(
        default_factory=dict,
        description="Related measurements.",
    )


class PanicRecord(BaseModel):
    """An unhandled error raised inside an RPC method."""

    model_config = ConfigDict(frozen=True)

    method: str = Field(..., description="RPC method name.")
    panic_value: Any = Field(..., description="The raised value or exception.")
    stack: str = Field(default="", description="Formatted stack trace.")


class HTTPPanicRecord(BaseModel):
    """An unhandled error raised while serving an HTTP request."""

    model_config = ConfigDict(frozen=True)

    method: str = Field(..., description="HTTP method.")
    url: str = Field(..., description="Request URL.")
    remote_addr: str = Field(default="", description="Client address.")
    panic_value: Any = Field(..., description="The raised value or exception.")
    stack: str = Field(default="", description="Formatted stack trace.")
