"""
Feishu (Lark) bot webhook channel for Sentinel Notifier.

Posts text messages to a custom-bot webhook URL and interprets the
``{"code": …, "msg": …}`` response envelope. One attempt per message;
there is no retry.
"""

from __future__ import annotations

import json
from typing import Any

import httpx
import structlog

from .base import (
    AlertChannel,
    HTTPStatusError,
    NetworkError,
    RemoteError,
    ResponseDecodeError,
    SerializationError,
)

logger = structlog.get_logger()

# Used when no webhook URL is configured.
DEFAULT_WEBHOOK_URL = "https://open.feishu.cn/open-apis/bot/v2/hook/sentinel-default"


def build_text_message(text: str) -> dict[str, Any]:
    """Wrap *text* in the bot API's text-message envelope."""
    return {"msg_type": "text", "content": {"text": text}}


class FeishuChannel(AlertChannel):
    """Deliver messages to a Feishu custom-bot webhook.

    Args:
        url: Webhook URL (the token in the path is the only credential).
        client: Optional pre-built ``httpx.Client``; one with httpx's
                default timeout is created lazily otherwise.
        headers: Optional extra headers to include on every request.
    """

    name: str = "feishu"

    def __init__(
        self,
        url: str,
        *,
        client: httpx.Client | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.url = url
        self.headers = headers or {}
        self._client = client

    def _get_client(self) -> httpx.Client:
        """Return (and lazily create) the shared ``httpx.Client``."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client()
        return self._client

    def send(self, text: str) -> None:
        """POST *text* as a text message.

        Raises:
            SerializationError: The envelope could not be JSON-encoded.
            NetworkError: The request failed before a response arrived.
            HTTPStatusError: Non-2xx response status.
            ResponseDecodeError: The body is not a JSON object with ``code``.
            RemoteError: ``code`` is non-zero.
        """
        try:
            body = json.dumps(build_text_message(text), ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"failed to serialise message: {exc}") from exc

        try:
            resp = self._get_client().post(
                self.url,
                content=body.encode("utf-8"),
                headers={"Content-Type": "application/json", **self.headers},
            )
        except (httpx.TransportError, httpx.InvalidURL) as exc:
            raise NetworkError(f"request failed: {exc}") from exc

        if not resp.is_success:
            raise HTTPStatusError(resp.status_code)

        try:
            result = resp.json()
        except ValueError as exc:
            raise ResponseDecodeError(f"failed to decode response: {exc}") from exc
        if not isinstance(result, dict) or "code" not in result:
            raise ResponseDecodeError("response has no \"code\" field")
        code = result["code"]
        # bool is an int subclass; only a real JSON integer is accepted.
        if type(code) is not int:
            raise ResponseDecodeError(f"response code is not an integer: {code!r}")

        if code != 0:
            raise RemoteError(code, str(result.get("msg", "")))

        logger.debug("feishu_delivered", status=resp.status_code)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None and not self._client.is_closed:
            self._client.close()
            self._client = None
