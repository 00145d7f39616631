"""
Exceptions raised while talking to the NVP gateway.
"""

from __future__ import annotations

from typing import Dict, Optional

__all__ = [
    "GatewayError",
    "MissingFieldError",
    "NVPError",
    "RequestTimeoutError",
    "StatusError",
    "TransportError",
]


class NVPError(Exception):
    """
    Base class for every failure of a gateway call.

    ``details`` holds the GetExpressCheckoutDetails response when the error
    happened while finalizing a checkout, so callers keep the diagnostic context.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self.details: Optional[Dict[str, str]] = None


class TransportError(NVPError):
    """Raised when the connection to the gateway fails."""


class RequestTimeoutError(NVPError, TimeoutError):
    """Raised when the gateway does not answer within the configured timeout."""


class StatusError(NVPError):
    """Raised when the gateway answers with an HTTP status above 200."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Gateway responded with {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class GatewayError(NVPError):
    """
    Raised when the ``ACK`` field of a response reports anything but success.
    """

    def __init__(self, response: Dict[str, str]) -> None:
        self.ack = response.get("ACK")
        self.long_message = response.get("L_LONGMESSAGE0")
        self.short_message = response.get("L_SHORTMESSAGE0")
        self.error_code = response.get("L_ERRORCODE0")
        self.response = response
        super().__init__(f"ACK {self.ack}: {self.long_message}")


class MissingFieldError(NVPError):
    """Raised when a response lacks a field the checkout flow depends on."""

    def __init__(self, field: str, response: Dict[str, str], reason: str = "missing") -> None:
        super().__init__(f"Gateway response field {field} is {reason}")
        self.field = field
        self.response = response
