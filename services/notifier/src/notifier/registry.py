"""
Process-wide business-alert dispatcher for convenience call sites.

Prefer constructing a :class:`BusinessAlertDispatcher` at start-up and
passing it to the code that raises alerts. This module keeps one lazily
created instance for call sites that cannot be given one.
"""

from __future__ import annotations

import threading
from collections.abc import Callable

import structlog

from sentinel_common.config import Settings, get_settings
from sentinel_common.logging import configure_logging
from sentinel_common.models.alert import AlertCategory, AlertRecord, MetricValue

from .dispatcher import BusinessAlertDispatcher

logger = structlog.get_logger()

_instance: BusinessAlertDispatcher | None = None
_instance_lock = threading.Lock()


def _get_or_create(factory: Callable[[], BusinessAlertDispatcher]) -> BusinessAlertDispatcher:
    global _instance
    if _instance is None:
        with _instance_lock:
            if _instance is None:
                _instance = factory()
                logger.info(
                    "dispatcher_initialized",
                    endpoint=_instance.endpoint,
                    is_prod=_instance.is_prod,
                )
    return _instance


def get_global_dispatcher(webhook_url: str = "", is_prod: bool = False) -> BusinessAlertDispatcher:
    """Return the process-wide dispatcher, creating it on first call.

    Arguments are only used by the call that creates the instance; later
    calls get the same object whatever they pass.
    """
    return _get_or_create(lambda: BusinessAlertDispatcher(webhook_url, is_prod))


def init_from_settings(settings: Settings | None = None) -> BusinessAlertDispatcher:
    """Initialise logging and the process-wide dispatcher from :class:`Settings`.

    Logging is configured only by the call that creates the instance.
    """
    settings = settings or get_settings()

    def factory() -> BusinessAlertDispatcher:
        configure_logging(
            settings.log_level,
            json_logs=settings.log_json,
            service_name=settings.service_name,
        )
        return BusinessAlertDispatcher(
            settings.feishu_webhook_url,
            settings.is_prod,
            cooldown_s=settings.alert_cooldown_s,
        )

    return _get_or_create(factory)


def peek_global_dispatcher() -> BusinessAlertDispatcher | None:
    """Return the process-wide dispatcher without creating it."""
    return _instance


def reset_global_dispatcher() -> None:
    """Close and forget the process-wide dispatcher."""
    global _instance
    with _instance_lock:
        if _instance is not None:
            _instance.close()
        _instance = None


def send_business_alert(
    category: AlertCategory,
    title: str,
    description: str,
    origin: str,
    subject: str,
    severity: str,
    metrics: dict[str, MetricValue] | None = None,
) -> None:
    """Build an :class:`AlertRecord` and collect it on the global dispatcher.

    Does nothing but log an error if :func:`get_global_dispatcher` (or
    :func:`init_from_settings`) has not been called yet.
    """
    dispatcher = _instance
    if dispatcher is None:
        logger.error("dispatcher_not_initialized", category=str(getattr(category, "value", category)))
        return

    try:
        alert = AlertRecord(
            category=category,
            title=title,
            description=description,
            origin=origin,
            subject=subject,
            severity=severity,
            metrics=metrics or {},
        )
    except ValueError as exc:
        logger.error("alert_record_invalid", title=title, error=str(exc))
        return

    dispatcher.collect(alert)
