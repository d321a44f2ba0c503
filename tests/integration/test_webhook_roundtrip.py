"""Integration tests: BusinessAlertDispatcher -> real HTTP endpoint.

Starts a throwaway HTTP server on localhost that mimics the Feishu bot
webhook, then drives the dispatcher through the real ``FeishuChannel``
(no mocked transport) to check the request count and cooldown state for
the success and HTTP 500 scenarios.
"""

from __future__ import annotations

import json
import threading
from collections.abc import Iterator
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Any

import httpx
import pytest

from sentinel_common.models.alert import AlertCategory, AlertRecord
from notifier.channels.feishu_channel import FeishuChannel
from notifier.dispatcher import BusinessAlertDispatcher


# ---------------------------------------------------------------------------
# Stub webhook server
# ---------------------------------------------------------------------------

class _WebhookState:
    def __init__(self) -> None:
        self.bodies: list[dict[str, Any]] = []
        self.status = 200
        self.response: dict[str, Any] = {"code": 0, "msg": "ok"}


def _make_handler(state: _WebhookState) -> type[BaseHTTPRequestHandler]:
    class Handler(BaseHTTPRequestHandler):
        def do_POST(self) -> None:  # noqa: N802
            length = int(self.headers.get("Content-Length", 0))
            state.bodies.append(json.loads(self.rfile.read(length)))
            payload = json.dumps(state.response).encode()
            self.send_response(state.status)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(payload)))
            self.end_headers()
            self.wfile.write(payload)

        def log_message(self, format: str, *args: Any) -> None:
            pass

    return Handler


@pytest.fixture()
def webhook() -> Iterator[tuple[str, _WebhookState]]:
    """Run the stub webhook server for one test."""
    state = _WebhookState()
    server = HTTPServer(("127.0.0.1", 0), _make_handler(state))
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    yield f"http://{host}:{port}/open-apis/bot/v2/hook/test", state
    server.shutdown()
    server.server_close()


def _dispatcher(url: str) -> BusinessAlertDispatcher:
    # trust_env=False keeps proxy settings from rerouting localhost traffic.
    channel = FeishuChannel(url, client=httpx.Client(trust_env=False))
    return BusinessAlertDispatcher(url, channel=channel)


def _rate_limit_alert() -> AlertRecord:
    return AlertRecord(
        category=AlertCategory.RATE_LIMIT,
        title="Rate limiting triggered",
        description="Login endpoint reached its limit",
        origin="user-service",
        subject="Login",
        severity="medium",
        metrics={"qps": 120},
    )


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestWebhookRoundTrip:

    def test_success_then_immediate_repeat(self, webhook) -> None:
        url, state = webhook
        dispatcher = _dispatcher(url)
        try:
            dispatcher.collect(_rate_limit_alert())
            assert len(state.bodies) == 1
            assert dispatcher.last_sent(AlertCategory.RATE_LIMIT) is not None

            dispatcher.collect(_rate_limit_alert())
            assert len(state.bodies) == 1
        finally:
            dispatcher.close()

        body = state.bodies[0]
        assert body["msg_type"] == "text"
        assert "**Metrics**: **qps**: 120" in body["content"]["text"]

    def test_http_500_leaves_window_open(self, webhook) -> None:
        url, state = webhook
        state.status = 500
        dispatcher = _dispatcher(url)
        try:
            dispatcher.collect(_rate_limit_alert())  # should not raise
            assert dispatcher.last_sent(AlertCategory.RATE_LIMIT) is None

            dispatcher.collect(_rate_limit_alert())
            assert len(state.bodies) == 2
        finally:
            dispatcher.close()

    def test_remote_error_code_leaves_window_open(self, webhook) -> None:
        url, state = webhook
        state.response = {"code": 19024, "msg": "Key Words Not Found"}
        dispatcher = _dispatcher(url)
        try:
            dispatcher.collect(_rate_limit_alert())
            assert dispatcher.last_sent(AlertCategory.RATE_LIMIT) is None
        finally:
            dispatcher.close()

    def test_unreachable_endpoint_does_not_raise(self) -> None:
        dispatcher = _dispatcher("http://127.0.0.1:9/hook")
        try:
            dispatcher.collect(_rate_limit_alert())
            assert dispatcher.last_sent(AlertCategory.RATE_LIMIT) is None
        finally:
            dispatcher.close()
