"""Public interface for the push gateway adapter."""

from __future__ import annotations

from .client import GatewayTransport
from .schema import NotificationPayload, ResultPayload, SendRequest, SendResponse
from .sender import GatewaySender
from .translator import build_send_request, parse_attempt_response, parse_outcome

__all__ = [
    "GatewaySender",
    "GatewayTransport",
    "NotificationPayload",
    "ResultPayload",
    "SendRequest",
    "SendResponse",
    "build_send_request",
    "parse_attempt_response",
    "parse_outcome",
]
