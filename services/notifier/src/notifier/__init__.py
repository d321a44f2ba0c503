"""
Sentinel Notifier service.

Forwards business alerts and RPC/HTTP panic reports to a Feishu bot
webhook, dropping repeats of the same category inside a cooldown window.
"""

from .dispatcher import (
    BusinessAlertDispatcher,
    HTTPPanicAlertCollector,
    PanicAlertCollector,
    RateLimitedNotifier,
)
from .registry import get_global_dispatcher, init_from_settings, send_business_alert

__all__ = [
    "BusinessAlertDispatcher",
    "HTTPPanicAlertCollector",
    "PanicAlertCollector",
    "RateLimitedNotifier",
    "get_global_dispatcher",
    "init_from_settings",
    "send_business_alert",
]
