"""Dispatch domain: outcomes, backoff, result bookkeeping and the retry loop."""

from __future__ import annotations

from .backoff import BACKOFF_INITIAL_DELAY, MAX_BACKOFF_DELAY, BackoffScheduler, LockedRandom
from .dispatch import MulticastDispatcher
from .errors import (
    GatewayError,
    InternalConsistencyError,
    InvalidArgumentError,
    MalformedResponseError,
    ProtocolError,
    PushcastError,
    TransportExhaustedError,
)
from .model import Delivered, ErrorKind, Failed, Message, Notification, Unresolved
from .results import AttemptResponse, DispatchReport, ResultStore, finalize_report

__all__ = [
    "BACKOFF_INITIAL_DELAY",
    "MAX_BACKOFF_DELAY",
    "AttemptResponse",
    "BackoffScheduler",
    "Delivered",
    "DispatchReport",
    "ErrorKind",
    "Failed",
    "GatewayError",
    "InternalConsistencyError",
    "InvalidArgumentError",
    "LockedRandom",
    "MalformedResponseError",
    "Message",
    "MulticastDispatcher",
    "Notification",
    "ProtocolError",
    "PushcastError",
    "ResultStore",
    "TransportExhaustedError",
    "Unresolved",
    "finalize_report",
]
