"""
Prometheus metrics helpers for Sentinel Notifier.

Shared metric definitions for the rate-limited notifiers: how many alerts
were delivered, dropped inside a cooldown window, or failed on the way out.
"""

from __future__ import annotations

from prometheus_client import Counter

alerts_sent_total = Counter(
    "notifier_alerts_sent_total",
    "Alerts delivered to the webhook endpoint",
    ["notifier", "key"],
)
alerts_suppressed_total = Counter(
    "notifier_alerts_suppressed_total",
    "Alerts dropped because their key was inside the cooldown window",
    ["notifier", "key"],
)
alerts_failed_total = Counter(
    "notifier_alerts_failed_total",
    "Alerts that could not be rendered or delivered",
    ["notifier", "reason"],
)
