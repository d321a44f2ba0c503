"""
Notifier channel package for Sentinel Notifier.

Contains the abstract AlertChannel base class, the DeliveryError
taxonomy, and the Feishu webhook transport.
"""

from .base import (
    AlertChannel,
    DeliveryError,
    HTTPStatusError,
    NetworkError,
    RemoteError,
    ResponseDecodeError,
    SerializationError,
)
from .feishu_channel import DEFAULT_WEBHOOK_URL, FeishuChannel

__all__ = [
    "DEFAULT_WEBHOOK_URL",
    "AlertChannel",
    "DeliveryError",
    "FeishuChannel",
    "HTTPStatusError",
    "NetworkError",
    "RemoteError",
    "ResponseDecodeError",
    "SerializationError",
]
