"""Error taxonomy for dispatching."""

from __future__ import annotations


class PushcastError(RuntimeError):
    """Base class for dispatch errors."""


class InvalidArgumentError(PushcastError, ValueError):
    """Raised before any network activity when the call arguments are unusable."""


class GatewayError(PushcastError):
    """Raised when a whole attempt failed; the attempt counts as having no response."""


class ProtocolError(GatewayError):
    """Raised when the gateway answers a batch with a non-success status."""

    def __init__(self, status: int, body: str) -> None:
        super().__init__(f"Gateway responded with HTTP {status}: {body}")
        self.status = status
        self.body = body


class MalformedResponseError(GatewayError):
    """Raised when a successful response body cannot be parsed."""

    def __init__(self, message: str, *, body: str) -> None:
        super().__init__(message)
        self.body = body


class TransportExhaustedError(PushcastError):
    """Raised when no attempt within the retry budget produced a response."""

    def __init__(self, attempts: int) -> None:
        super().__init__(f"Could not reach the gateway after {attempts} attempts")
        self.attempts = attempts


class InternalConsistencyError(PushcastError):
    """Raised when a response violates the transport contract; never retried."""
