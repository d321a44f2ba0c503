"""
Panic capture helpers for Sentinel Notifier.

Context managers that report an exception escaping an RPC method or an
HTTP handler to the matching panic notifier, then let it propagate.
"""

from __future__ import annotations

import traceback
from collections.abc import Iterator
from contextlib import contextmanager

from sentinel_common.models.alert import HTTPPanicRecord, PanicRecord

from .dispatcher import RateLimitedNotifier


@contextmanager
def report_panics(collector: RateLimitedNotifier[PanicRecord], method: str) -> Iterator[None]:
    """Collect a :class:`PanicRecord` for any exception raised in the block.

    The exception is re-raised after reporting.
    """
    try:
        yield
    except Exception as exc:
        collector.collect(
            PanicRecord(method=method, panic_value=exc, stack=traceback.format_exc()),
        )
        raise


@contextmanager
def report_http_panics(
    collector: RateLimitedNotifier[HTTPPanicRecord],
    method: str,
    url: str,
    remote_addr: str = "",
) -> Iterator[None]:
    """Collect an :class:`HTTPPanicRecord` for any exception raised in the block."""
    try:
        yield
    except Exception as exc:
        collector.collect(
            HTTPPanicRecord(
                method=method,
                url=url,
                remote_addr=remote_addr,
                panic_value=exc,
                stack=traceback.format_exc(),
            ),
        )
        raise
