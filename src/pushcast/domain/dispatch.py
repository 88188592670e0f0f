"""Retrying multicast dispatch.

Each attempt submits only the recipients that are still unresolved. Outcomes are merged into a
``ResultStore`` so a recipient that was delivered (or permanently rejected) is never resent, and
the final report lists every recipient in the caller's original order.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from .backoff import BackoffScheduler
from .errors import (
    GatewayError,
    InvalidArgumentError,
    TransportExhaustedError,
)
from .ports.transport import TransientUnavailable
from .results import ResultStore, finalize_report

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from .model import AttemptId, Message, Outcome, RecipientId
    from .ports.transport import MulticastTransport
    from .results import AttemptResponse, DispatchReport

log = getLogger(__name__)

type Sleeper = Callable[[float], Awaitable[None]]


def _validate_recipients(recipients: Sequence[RecipientId] | None) -> list[RecipientId]:
    if recipients is None:
        raise InvalidArgumentError("recipients cannot be None")
    if isinstance(recipients, str):
        raise InvalidArgumentError("recipients must be a sequence of ids, not a single string")
    validated = list(recipients)
    if not validated:
        raise InvalidArgumentError("recipients cannot be empty")
    seen: set[RecipientId] = set()
    for recipient in validated:
        if recipient is None or not str(recipient).strip():
            raise InvalidArgumentError("recipient ids cannot be blank")
        if recipient in seen:
            raise InvalidArgumentError(f"duplicate recipient id: {recipient}")
        seen.add(recipient)
    return validated


def _validate_message(message: Message | None) -> Message:
    if message is None:
        raise InvalidArgumentError("message cannot be None")
    return message


def _validate_retries(max_retries: int) -> int:
    if max_retries < 0:
        raise InvalidArgumentError("max_retries must be non-negative")
    return max_retries


@dataclass(slots=True)
class MulticastDispatcher:
    transport: MulticastTransport
    backoff: BackoffScheduler = field(default_factory=BackoffScheduler)
    sleep: Sleeper = asyncio.sleep

    async def dispatch(
        self,
        message: Message,
        recipients: Sequence[RecipientId],
        *,
        max_retries: int,
    ) -> DispatchReport:
        """Send ``message`` to all recipients, retrying transient failures.

        Raises ``TransportExhaustedError`` if none of the ``max_retries + 1`` attempts produced a
        response.
        """

        message = _validate_message(message)
        original_order = _validate_recipients(recipients)
        max_retries = _validate_retries(max_retries)

        store = ResultStore()
        pending = list(original_order)
        attempt_ids: list[AttemptId] = []
        backoff = self.backoff.initial_delay
        attempt = 0

        while True:
            attempt += 1
            log.debug(
                "Attempt #%s to send message to %s of %s recipients",
                attempt,
                len(pending),
                len(original_order),
            )
            response = await self._attempt(message, pending, attempt=attempt)

            if response is not None:
                log.info("Attempt #%s produced attempt id %s", attempt, response.attempt_id)
                attempt_ids.append(response.attempt_id)
                pending = store.merge(response, pending)
                try_again = bool(pending) and attempt <= max_retries
            else:
                try_again = attempt <= max_retries

            if not try_again:
                break
            backoff = await self._wait(backoff)

        if not attempt_ids:
            raise TransportExhaustedError(attempt)

        report = finalize_report(store, original_order, attempt_ids)
        log.info(
            "Dispatch finished after %s attempts: success=%s, failure=%s, canonical_ids=%s, "
            "attempt_id=%s",
            attempt,
            report.success,
            report.failure,
            report.canonical_ids,
            report.attempt_id,
        )
        return report

    async def dispatch_once(
        self,
        message: Message,
        recipients: Sequence[RecipientId],
    ) -> AttemptResponse | None:
        """Single attempt without retries; ``None`` when the gateway could not be reached.

        ``GatewayError`` subclasses propagate so the caller can inspect them.
        """

        message = _validate_message(message)
        submitted = _validate_recipients(recipients)
        result = await self.transport.post(message, submitted)
        if isinstance(result, TransientUnavailable):
            log.debug("Gateway unavailable: %s", result.reason)
            return None
        result.pair_with(submitted)  # raises on an outcome count mismatch
        return result

    async def send_once(self, message: Message, recipient: RecipientId) -> Outcome | None:
        """Single-recipient attempt without retries.

        Returns ``None`` when no response was obtained or when the response does not hold exactly
        one outcome.
        """

        if recipient is None:
            raise InvalidArgumentError("recipient cannot be None")
        message = _validate_message(message)
        submitted = _validate_recipients([recipient])
        result = await self.transport.post(message, submitted)
        if isinstance(result, TransientUnavailable):
            log.debug("Gateway unavailable: %s", result.reason)
            return None
        if len(result.outcomes) != 1:
            log.warning(
                "Found %s results in single multicast request, expected one",
                len(result.outcomes),
            )
            return None
        return result.outcomes[0]

    async def send(
        self,
        message: Message,
        recipient: RecipientId,
        *,
        max_retries: int,
    ) -> Outcome:
        """Single-recipient send, retrying while no usable response comes back."""

        max_retries = _validate_retries(max_retries)
        backoff = self.backoff.initial_delay
        attempt = 0
        while True:
            attempt += 1
            log.debug("Attempt #%s to send message to a single recipient", attempt)
            try:
                outcome = await self.send_once(message, recipient)
            except GatewayError as exc:
                log.debug("Gateway error on attempt %s: %s", attempt, exc)
                outcome = None
            if outcome is not None:
                return outcome
            if attempt > max_retries:
                raise TransportExhaustedError(attempt)
            backoff = await self._wait(backoff)

    async def _attempt(
        self,
        message: Message,
        pending: Sequence[RecipientId],
        *,
        attempt: int,
    ) -> AttemptResponse | None:
        try:
            result = await self.transport.post(message, pending)
        except GatewayError as exc:
            log.debug("Gateway error on attempt %s: %s", attempt, exc)
            return None
        if isinstance(result, TransientUnavailable):
            log.debug("Gateway unavailable on attempt %s: %s", attempt, result.reason)
            return None
        return result

    async def _wait(self, backoff: int) -> int:
        sleep_millis, new_backoff = self.backoff.next_delay(backoff)
        log.debug("Sleeping %s ms before next attempt", sleep_millis)
        await self.sleep(sleep_millis / 1000)
        return new_backoff
