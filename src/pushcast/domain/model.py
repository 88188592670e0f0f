"""Domain model: messages, notifications and per-recipient outcomes.

Messages are immutable value objects forwarded unchanged to the transport. Outcomes form a small
tagged union (``Delivered | Failed | Unresolved``) describing what the gateway reported for one
recipient after an attempt.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING

from .errors import InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Mapping

type RecipientId = str
type AttemptId = int


class ErrorKind(StrEnum):
    """Error kinds the gateway reports per recipient."""

    UNAVAILABLE = "Unavailable"
    INTERNAL_SERVER_ERROR = "InternalServerError"
    MISSING_REGISTRATION = "MissingRegistration"
    INVALID_REGISTRATION = "InvalidRegistration"
    NOT_REGISTERED = "NotRegistered"
    MISMATCH_SENDER_ID = "MismatchSenderId"
    MESSAGE_TOO_BIG = "MessageTooBig"
    INVALID_DATA_KEY = "InvalidDataKey"
    INVALID_TTL = "InvalidTtl"
    INVALID_PACKAGE_NAME = "InvalidPackageName"
    DEVICE_MESSAGE_RATE_EXCEEDED = "DeviceMessageRateExceeded"
    TOPICS_MESSAGE_RATE_EXCEEDED = "TopicsMessageRateExceeded"


TRANSIENT_ERROR_KINDS: frozenset[str] = frozenset(
    {ErrorKind.UNAVAILABLE, ErrorKind.INTERNAL_SERVER_ERROR}
)


def is_transient_error(error: str) -> bool:
    return error in TRANSIENT_ERROR_KINDS


@dataclass(frozen=True, slots=True)
class Delivered:
    message_id: str
    canonical_id: str | None = None

    @property
    def has_canonical_id(self) -> bool:
        return self.canonical_id is not None


@dataclass(frozen=True, slots=True)
class Failed:
    error: str

    @property
    def is_transient(self) -> bool:
        return is_transient_error(self.error)


@dataclass(frozen=True, slots=True)
class Unresolved:
    pass


type Outcome = Delivered | Failed | Unresolved

UNRESOLVED = Unresolved()


def is_transient(outcome: Outcome) -> bool:
    """Whether the outcome should be retried on the next attempt."""

    return isinstance(outcome, Failed) and outcome.is_transient


def is_final(outcome: Outcome) -> bool:
    """Whether the outcome is definitive for the rest of a dispatch."""

    if isinstance(outcome, Delivered):
        return True
    if isinstance(outcome, Failed):
        return not outcome.is_transient
    return False


@dataclass(frozen=True, slots=True)
class Notification:
    """Display notification attached to a message."""

    title: str | None = None
    body: str | None = None
    icon: str | None = None
    sound: str | None = None
    badge: int | None = None
    tag: str | None = None
    color: str | None = None
    click_action: str | None = None
    body_loc_key: str | None = None
    body_loc_args: tuple[str, ...] | None = None
    title_loc_key: str | None = None
    title_loc_args: tuple[str, ...] | None = None


def _freeze_data(data: Mapping[str, str] | None) -> Mapping[str, str]:
    frozen = dict(data or {})
    for key, value in frozen.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise InvalidArgumentError(f"data entries must map str to str, got {key!r}: {value!r}")
    return MappingProxyType(frozen)


@dataclass(frozen=True, slots=True)
class Message:
    """Payload sent to every recipient of a dispatch."""

    collapse_key: str | None = None
    time_to_live: int | None = None
    delay_while_idle: bool | None = None
    dry_run: bool | None = None
    restricted_package_name: str | None = None
    data: Mapping[str, str] = field(default_factory=lambda: _freeze_data(None))
    notification: Notification | None = None

    def __post_init__(self) -> None:
        if self.time_to_live is not None and self.time_to_live < 0:
            raise InvalidArgumentError("time_to_live must be non-negative")
        object.__setattr__(self, "data", _freeze_data(self.data))

    def with_data(self, **values: str) -> Message:
        merged = dict(self.data)
        merged.update(values)
        return Message(
            collapse_key=self.collapse_key,
            time_to_live=self.time_to_live,
            delay_while_idle=self.delay_while_idle,
            dry_run=self.dry_run,
            restricted_package_name=self.restricted_package_name,
            data=merged,
            notification=self.notification,
        )


__all__ = [
    "TRANSIENT_ERROR_KINDS",
    "UNRESOLVED",
    "AttemptId",
    "Delivered",
    "ErrorKind",
    "Failed",
    "Message",
    "Notification",
    "Outcome",
    "RecipientId",
    "Unresolved",
    "is_final",
    "is_transient",
    "is_transient_error",
]
