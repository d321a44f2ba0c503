"""
Message rendering for Sentinel Notifier.

Turns alert records into the markdown-flavoured text posted to the
Feishu bot. Every renderer is a pure function of its record and the
render time, so the output is reproducible when ``now`` is fixed.
"""

from __future__ import annotations

from datetime import datetime

from sentinel_common.models.alert import (
    AlertRecord,
    HTTPPanicRecord,
    MetricValue,
    PanicRecord,
    Severity,
)
from sentinel_common.utils import format_display_time, local_now

STACK_LIMIT = 500
STACK_TRUNCATED_MARKER = "\n... (stack truncated)"
GENERIC_ICON = "📢"

_SEVERITY_ICONS: dict[str, str] = {
    Severity.CRITICAL.value: "🚨",
    Severity.HIGH.value: "⚠️",
    Severity.MEDIUM.value: "⚡",
    Severity.LOW.value: "ℹ️",
}


def severity_icon(severity: str) -> str:
    """Return the glyph for *severity* (case-insensitive)."""
    return _SEVERITY_ICONS.get((severity or "").lower(), GENERIC_ICON)


def format_metric_value(value: MetricValue) -> str:
    """Stringify a metric value; string lists are comma-joined."""
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    return str(value)


def render_business_alert(
    alert: AlertRecord,
    *,
    now: datetime | None = None,
    is_prod: bool | None = None,
) -> str:
    """Render a business alert.

    Args:
        alert: The alert to render.
        now: Render time; defaults to the local wall clock.
        is_prod: When not ``None``, an environment line is included.

    Returns:
        The message text. Metrics are listed sorted by key; no field is
        truncated.
    """
    lines = [
        f"**{severity_icon(alert.severity)} Business alert**",
        "",
        f"**Time**: {format_display_time(now or local_now())}",
        f"**Category**: {alert.category.label}",
        f"**Title**: {alert.title}",
        f"**Service**: {alert.origin}",
        f"**Severity**: {alert.severity or 'unknown'}",
    ]
    if is_prod is not None:
        lines.append(f"**Production**: {str(is_prod).lower()}")
    if alert.subject:
        lines.append(f"**Method**: {alert.subject}")
    if alert.metrics:
        pairs = ", ".join(
            f"**{key}**: {format_metric_value(alert.metrics[key])}"
            for key in sorted(alert.metrics)
        )
        lines.append(f"**Metrics**: {pairs}")

    content = "\n".join(lines) + "\n"
    if alert.description:
        content += f"\n**Details**:\n{alert.description}"
    return content


def render_rpc_panic(
    info: PanicRecord,
    *,
    is_prod: bool,
    now: datetime | None = None,
) -> str:
    """Render an RPC panic report (the stack is not included)."""
    return (
        "**🚨 RPC panic alert**\n\n"
        f"**Time**: {format_display_time(now or local_now())}\n"
        f"**Production**: {str(is_prod).lower()}\n"
        f"**Method**: {info.method}\n"
        f"**Error**: {info.panic_value}\n\n"
    )


def truncate_stack(stack: str, limit: int = STACK_LIMIT) -> str:
    """Cut *stack* to *limit* characters, appending a marker when cut."""
    if len(stack) > limit:
        return stack[:limit] + STACK_TRUNCATED_MARKER
    return stack


def render_http_panic(
    info: HTTPPanicRecord,
    *,
    now: datetime | None = None,
    is_prod: bool | None = None,
) -> str:
    """Render an HTTP panic report with a truncated stack trace.

    A ``**Production**`` line is included when *is_prod* is not ``None``.
    """
    prod_line = "" if is_prod is None else f"**Production**: {str(is_prod).lower()}\n"
    return (
        "**🚨 HTTP panic alert**\n\n"
        f"**Time**: {format_display_time(now or local_now())}\n"
        f"**Request**: {info.method} {info.url}\n"
        f"**Client**: {info.remote_addr}\n"
        f"{prod_line}"
        f"**Error**: {info.panic_value}\n\n"
        f"**Stack trace**:\n```\n{truncate_stack(info.stack)}\n```"
    )
