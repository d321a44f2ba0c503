"""
Threshold checks that raise business alerts.

Ready-made call sites for the common business conditions: request rate
over the limit, SMS quota running out, slow requests and error-rate
spikes. Each check returns ``True`` when it raised an alert (whether or
not the dispatcher then suppressed it inside the cooldown window).

Every check accepts an explicit ``dispatcher``; without one the
process-wide dispatcher from :mod:`notifier.registry` is used.
"""

from __future__ import annotations

from sentinel_common.models.alert import AlertCategory, AlertRecord, MetricValue, Severity

from .dispatcher import BusinessAlertDispatcher
from .registry import send_business_alert

SMS_USAGE_HIGH_PCT = 90.0
SMS_USAGE_CRITICAL_PCT = 95.0
DEFAULT_ERROR_RATE_THRESHOLD = 0.1


def _emit(
    dispatcher: BusinessAlertDispatcher | None,
    category: AlertCategory,
    title: str,
    description: str,
    origin: str,
    subject: str,
    severity: Severity,
    metrics: dict[str, MetricValue],
) -> None:
    if dispatcher is None:
        send_business_alert(
            category, title, description, origin, subject, severity.value, metrics,
        )
        return
    dispatcher.collect(
        AlertRecord(
            category=category,
            title=title,
            description=description,
            origin=origin,
            subject=subject,
            severity=severity.value,
            metrics=metrics,
        ),
    )


def check_rate_limit(
    service: str,
    method: str,
    current_qps: int,
    threshold: int,
    *,
    dispatcher: BusinessAlertDispatcher | None = None,
) -> bool:
    """Alert when *current_qps* exceeds *threshold*."""
    if current_qps <= threshold:
        return False
    _emit(
        dispatcher,
        AlertCategory.RATE_LIMIT,
        "Rate limiting triggered",
        f"{service}.{method} hit its rate limit: current QPS {current_qps}, threshold {threshold}",
        service,
        method,
        Severity.MEDIUM,
        {"current_qps": current_qps, "threshold": threshold, "strategy": "sliding window"},
    )
    return True


def check_sms_quota(
    remaining: int,
    total: int,
    *,
    service: str = "notification-service",
    dispatcher: BusinessAlertDispatcher | None = None,
) -> bool:
    """Alert when more than 90% of the SMS quota is used (critical above 95%)."""
    if total <= 0:
        return False
    usage = (total - remaining) * 100 / total
    if usage <= SMS_USAGE_HIGH_PCT:
        return False
    severity = Severity.CRITICAL if usage > SMS_USAGE_CRITICAL_PCT else Severity.HIGH
    _emit(
        dispatcher,
        AlertCategory.SMS_QUOTA,
        "SMS quota usage high",
        f"SMS quota usage reached {usage:.1f}%, top up soon",
        service,
        "CheckSMSQuota",
        severity,
        {"usage": f"{usage:.1f}%", "remaining": remaining, "total": total},
    )
    return True


def check_slow_request(
    service: str,
    method: str,
    duration_s: float,
    threshold_s: float,
    *,
    dispatcher: BusinessAlertDispatcher | None = None,
) -> bool:
    """Alert when a request took longer than *threshold_s* seconds."""
    if duration_s <= threshold_s:
        return False
    metrics: dict[str, MetricValue] = {
        "duration": f"{duration_s:g}s",
        "threshold": f"{threshold_s:g}s",
    }
    if threshold_s > 0:
        metrics["ratio"] = round(duration_s / threshold_s, 2)
    _emit(
        dispatcher,
        AlertCategory.SLOW_REQUEST,
        "Slow request detected",
        f"{service}.{method} responded too slowly",
        service,
        method,
        Severity.MEDIUM,
        metrics,
    )
    return True


def check_error_rate(
    service: str,
    method: str,
    errors: int,
    total: int,
    *,
    threshold: float = DEFAULT_ERROR_RATE_THRESHOLD,
    dispatcher: BusinessAlertDispatcher | None = None,
) -> bool:
    """Alert when ``errors / total`` exceeds *threshold* (a fraction)."""
    if total <= 0:
        return False
    rate = errors / total
    if rate <= threshold:
        return False
    _emit(
        dispatcher,
        AlertCategory.HIGH_ERROR,
        "Error rate too high",
        f"{service}.{method} error rate is {rate:.1%}",
        service,
        method,
        Severity.CRITICAL,
        {
            "error_rate": f"{rate:.1%}",
            "threshold": f"{threshold:.1%}",
            "total_requests": total,
            "failed_requests": errors,
        },
    )
    return True
