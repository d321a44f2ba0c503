"""
Abstract base class and delivery errors for notifier channels.

Defines the AlertChannel interface every transport implements, and the
DeliveryError hierarchy a channel raises when a message does not arrive.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class DeliveryError(Exception):
    """A rendered message could not be delivered.

    Attributes:
        kind: Short machine-readable failure class, used as a log field
              and a metrics label.
    """

    kind: str = "delivery"


class SerializationError(DeliveryError):
    """The message could not be encoded into the wire format."""

    kind = "serialization"


class NetworkError(DeliveryError):
    """The request never got a response (DNS, refused, timeout, …)."""

    kind = "network"


class HTTPStatusError(DeliveryError):
    """The endpoint answered with a non-2xx status."""

    kind = "http_status"

    def __init__(self, status_code: int) -> None:
        super().__init__(f"webhook returned HTTP {status_code}")
        self.status_code = status_code


class ResponseDecodeError(DeliveryError):
    """The response body was not the expected JSON envelope."""

    kind = "decode"


class RemoteError(DeliveryError):
    """The endpoint reported an application-level error code."""

    kind = "remote"

    def __init__(self, code: int, msg: str) -> None:
        super().__init__(f"webhook returned error: code={code}, msg={msg}")
        self.code = code
        self.msg = msg


class AlertChannel(ABC):
    """Base class every delivery channel must implement.

    Attributes:
        name: Human-readable channel name used in logs.
    """

    name: str = "base"

    @abstractmethod
    def send(self, text: str) -> None:
        """Deliver the rendered *text*.

        Raises:
            DeliveryError: If the message was not accepted by the remote end.
        """

    def close(self) -> None:
        """Release any resources held by the channel (override if needed)."""
