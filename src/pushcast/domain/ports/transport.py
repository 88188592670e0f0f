"""Port for the network round trip to the messaging gateway."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pushcast.domain.model import Message, RecipientId
    from pushcast.domain.results import AttemptResponse


@dataclass(frozen=True, slots=True)
class TransientUnavailable:
    """Returned when a round trip could not complete (connection failure, unreadable body)."""

    reason: str


@runtime_checkable
class MulticastTransport(Protocol):
    """Performs one request to the gateway for the given recipients.

    Implementations return an ``AttemptResponse`` whose outcomes are aligned with ``recipients``,
    return ``TransientUnavailable`` when no response was obtained, and raise
    ``pushcast.domain.errors.GatewayError`` subclasses when the gateway rejected the whole batch
    or answered with something unparsable.
    """

    async def post(
        self,
        message: Message,
        recipients: Sequence[RecipientId],
    ) -> AttemptResponse | TransientUnavailable: ...


__all__ = ["MulticastTransport", "TransientUnavailable"]
