"""
Structured logging setup for Sentinel Notifier.

Configures structlog for JSON-formatted structured logging. Every log
line includes timestamp, level, service name, and event. Per-alert context
(notifier, key) is bound at dispatch time.
"""

from __future__ import annotations

import logging
import sys

import structlog


def _add_service(service_name: str) -> structlog.types.Processor:
    """Return a processor that stamps *service_name* on every event."""

    def processor(
        logger: object, method_name: str, event_dict: structlog.types.EventDict,
    ) -> structlog.types.EventDict:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def configure_logging(
    level: str = "INFO",
    *,
    json_logs: bool = True,
    service_name: str = "sentinel-notifier",
) -> None:
    """Configure structlog for the current process.

    Args:
        level: Minimum level name (``DEBUG``, ``INFO``, …). Unknown names
               fall back to ``INFO``.
        json_logs: Emit JSON lines when ``True``, coloured console output
                   otherwise.
        service_name: Value of the ``service`` key on every event.
    """
    numeric = getattr(logging, level.upper(), logging.INFO)
    renderer: structlog.types.Processor
    if json_logs:
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_service(service_name),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
