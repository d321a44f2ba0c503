"""Shared fixtures for notifier service tests."""

from __future__ import annotations

import json
import os
from collections.abc import Iterator
from typing import Any

import httpx
import pytest

# Set env vars before any sentinel_common import.
os.environ.setdefault("SN_FEISHU_WEBHOOK_URL", "https://example.com/hook/test")
os.environ.setdefault("SN_LOG_JSON", "false")

from sentinel_common.models.alert import AlertCategory, AlertRecord  # noqa: E402

from notifier.channels.feishu_channel import FeishuChannel  # noqa: E402
from notifier.registry import reset_global_dispatcher  # noqa: E402

TEST_URL = "https://example.com/hook/test"


class FakeClock:
    """Manually advanced unix-time clock."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubEndpoint:
    """Records posted bodies and answers with a configurable response."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body: Any = {"code": 0, "msg": "ok"}
        self.error: Exception | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if isinstance(self.body, (dict, list)):
            return httpx.Response(self.status_code, json=self.body)
        return httpx.Response(self.status_code, content=self.body)

    @property
    def payloads(self) -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]

    @property
    def texts(self) -> list[str]:
        return [p["content"]["text"] for p in self.payloads]


# ─── Fixtures ────────────────────────────────────────────────────


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def endpoint() -> StubEndpoint:
    return StubEndpoint()


@pytest.fixture()
def channel(endpoint: StubEndpoint) -> Iterator[FeishuChannel]:
    """A FeishuChannel whose HTTP client talks to the stub endpoint."""
    client = httpx.Client(transport=httpx.MockTransport(endpoint.handler))
    ch = FeishuChannel(TEST_URL, client=client)
    yield ch
    ch.close()


@pytest.fixture()
def sample_alert() -> AlertRecord:
    """A fully-populated rate-limit business alert."""
    return AlertRecord(
        category=AlertCategory.RATE_LIMIT,
        title="Rate limiting triggered",
        description="Login endpoint reached its rate limit",
        origin="user-service",
        subject="Login",
        severity="medium",
        metrics={"qps": 120},
    )


@pytest.fixture(autouse=True)
def _reset_registry() -> Iterator[None]:
    reset_global_dispatcher()
    yield
    reset_global_dispatcher()
