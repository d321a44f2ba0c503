"""
Rate-limited alert dispatcher for Sentinel Notifier.

Decides, for every incoming record, whether to deliver it or drop it,
then renders and sends the admitted ones through a channel.

Flow
----
1. Derive the rate-limit key from the record (the alert category for
   business alerts, a constant for the single-slot panic notifiers).
2. Drop the record if the key had a successful send less than
   ``cooldown_s`` ago.
3. Render the record and hand the text to the channel (one attempt).
4. On success record the send time for the key. A failed send records
   nothing, so the next record for the key is admitted immediately.

The whole sequence runs under one lock per notifier, send included, so
concurrent callers are serialised across all keys. ``collect`` never
raises: render and delivery failures end up in the log and in the
``notifier_alerts_failed_total`` counter.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Hashable
from datetime import datetime
from typing import Generic, TypeVar

import structlog

from sentinel_common.metrics import (
    alerts_failed_total,
    alerts_sent_total,
    alerts_suppressed_total,
)
from sentinel_common.models.alert import AlertRecord, HTTPPanicRecord, PanicRecord
from sentinel_common.utils import format_display_time

from .channels.base import AlertChannel, DeliveryError
from .channels.feishu_channel import DEFAULT_WEBHOOK_URL, FeishuChannel
from .renderer import render_business_alert, render_http_panic, render_rpc_panic
from .throttle import DEFAULT_COOLDOWN_S, CooldownThrottle

logger = structlog.get_logger()

RecordT = TypeVar("RecordT")

SINGLE_SLOT_KEY = "panic"


def _key_label(key: Hashable) -> str:
    """Return a log/metrics friendly label for *key*."""
    return str(getattr(key, "value", key))


class RateLimitedNotifier(Generic[RecordT]):
    """Deliver records through *channel* at most once per key per cooldown.

    Args:
        channel: Transport used for admitted records.
        render: ``(record, now) -> str`` message builder.
        key: ``record -> key`` extractor; defaults to a constant key, which
             makes the notifier single-slot.
        cooldown_s: Cooldown window in seconds (default 3 minutes).
        clock: Zero-argument callable returning the current unix time.
        name: Notifier name used in logs and metrics labels.
    """

    def __init__(
        self,
        channel: AlertChannel,
        render: Callable[[RecordT, datetime], str],
        *,
        key: Callable[[RecordT], Hashable] | None = None,
        cooldown_s: float = DEFAULT_COOLDOWN_S,
        clock: Callable[[], float] = time.time,
        name: str = "notifier",
    ) -> None:
        self.channel = channel
        self.name = name
        self._render = render
        self._key = key or (lambda _record: SINGLE_SLOT_KEY)
        self._throttle = CooldownThrottle(cooldown_s=cooldown_s, clock=clock)
        self._lock = threading.Lock()

    @property
    def cooldown_s(self) -> float:
        return self._throttle.cooldown_s

    @property
    def endpoint(self) -> str:
        """URL the channel posts to (empty for channels without one)."""
        return str(getattr(self.channel, "url", ""))

    def last_sent(self, key: Hashable = SINGLE_SLOT_KEY) -> float | None:
        """Return the unix time of the last successful send for *key*."""
        with self._lock:
            return self._throttle.last_sent(key)

    def collect(self, record: RecordT) -> None:
        """Deliver *record* unless its key is cooling down.

        Never raises; the outcome is only visible through logs, metrics
        and :meth:`last_sent`.
        """
        try:
            key = self._key(record)
        except Exception as exc:  # noqa: BLE001
            logger.error("alert_key_failed", notifier=self.name, error=str(exc))
            alerts_failed_total.labels(notifier=self.name, reason="key").inc()
            return

        label = _key_label(key)
        log = logger.bind(notifier=self.name, key=label)

        with self._lock:
            if self._throttle.is_suppressed(key):
                last = self._throttle.last_sent(key)
                log.info("alert_suppressed", last_sent=format_display_time(last))
                alerts_suppressed_total.labels(notifier=self.name, key=label).inc()
                return

            try:
                text = self._render(record, datetime.fromtimestamp(self._throttle.now()))
            except Exception as exc:  # noqa: BLE001
                log.error("alert_render_failed", error=str(exc))
                alerts_failed_total.labels(notifier=self.name, reason="render").inc()
                return

            try:
                self.channel.send(text)
            except DeliveryError as exc:
                log.error("alert_delivery_failed", kind=exc.kind, error=str(exc))
                alerts_failed_total.labels(notifier=self.name, reason=exc.kind).inc()
                return
            except Exception as exc:  # noqa: BLE001
                log.error("alert_delivery_unexpected_error", error=str(exc))
                alerts_failed_total.labels(notifier=self.name, reason="unexpected").inc()
                return

            sent_at = self._throttle.record(key)

        alerts_sent_total.labels(notifier=self.name, key=label).inc()
        log.info("alert_sent", sent_at=format_display_time(sent_at))

    def reset(self) -> None:
        """Forget all send history (every key is admitted again)."""
        with self._lock:
            self._throttle.reset()

    def close(self) -> None:
        """Release the channel's resources."""
        self.channel.close()


def _resolve_channel(webhook_url: str, channel: AlertChannel | None) -> AlertChannel:
    if channel is not None:
        return channel
    return FeishuChannel(webhook_url or DEFAULT_WEBHOOK_URL)


class BusinessAlertDispatcher(RateLimitedNotifier[AlertRecord]):
    """Business-alert notifier with an independent cooldown per category.

    Args:
        webhook_url: Feishu webhook URL; empty selects the default URL.
        is_prod: Shown in rendered messages, never used for branching.
        channel: Transport override (tests, alternative endpoints).
        cooldown_s: Cooldown window in seconds.
        clock: Unix-time clock.
    """

    def __init__(
        self,
        webhook_url: str = "",
        is_prod: bool = False,
        *,
        channel: AlertChannel | None = None,
        cooldown_s: float = DEFAULT_COOLDOWN_S,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.is_prod = is_prod
        super().__init__(
            _resolve_channel(webhook_url, channel),
            self._render_alert,
            key=lambda alert: alert.category,
            cooldown_s=cooldown_s,
            clock=clock,
            name="business",
        )

    def _render_alert(self, alert: AlertRecord, now: datetime) -> str:
        return render_business_alert(alert, now=now, is_prod=self.is_prod)


class PanicAlertCollector(RateLimitedNotifier[PanicRecord]):
    """Single-slot notifier for RPC panics: one message per cooldown window."""

    def __init__(
        self,
        webhook_url: str = "",
        is_prod: bool = False,
        *,
        channel: AlertChannel | None = None,
        cooldown_s: float = DEFAULT_COOLDOWN_S,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.is_prod = is_prod
        super().__init__(
            _resolve_channel(webhook_url, channel),
            self._render_panic,
            cooldown_s=cooldown_s,
            clock=clock,
            name="rpc_panic",
        )

    def _render_panic(self, info: PanicRecord, now: datetime) -> str:
        return render_rpc_panic(info, is_prod=self.is_prod, now=now)


class HTTPPanicAlertCollector(RateLimitedNotifier[HTTPPanicRecord]):
    """Single-slot notifier for HTTP handler panics."""

    def __init__(
        self,
        webhook_url: str = "",
        is_prod: bool = False,
        *,
        channel: AlertChannel | None = None,
        cooldown_s: float = DEFAULT_COOLDOWN_S,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.is_prod = is_prod
        super().__init__(
            _resolve_channel(webhook_url, channel),
            self._render_panic,
            cooldown_s=cooldown_s,
            clock=clock,
            name="http_panic",
        )

    def _render_panic(self, info: HTTPPanicRecord, now: datetime) -> str:
        return render_http_panic(info, now=now, is_prod=self.is_prod)
