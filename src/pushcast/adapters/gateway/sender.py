"""High-level sender binding gateway configuration, transport and dispatcher."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pushcast.config.backoff import BackoffConfig, get_backoff_config
from pushcast.config.gateway import get_gateway_config
from pushcast.domain.dispatch import MulticastDispatcher

from .client import GatewayTransport

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pushcast.config.gateway import GatewayConfig
    from pushcast.domain.dispatch import Sleeper
    from pushcast.domain.model import Message, Outcome, RecipientId
    from pushcast.domain.results import AttemptResponse, DispatchReport

    from .client import ClientFactory


@dataclass(slots=True)
class GatewaySender:
    """Sends messages through the gateway using the configured retry budget.

    Async methods reuse one connection pool for all attempts of a call. The ``*_sync`` variants
    run the coroutine with ``asyncio.run`` and must not be called from a running event loop.
    """

    config: GatewayConfig = field(default_factory=get_gateway_config)
    backoff: BackoffConfig = field(default_factory=get_backoff_config)
    client_factory: ClientFactory | None = None
    sleep: Sleeper = asyncio.sleep

    def _dispatcher(self, transport: GatewayTransport) -> MulticastDispatcher:
        return MulticastDispatcher(
            transport=transport,
            backoff=self.backoff.build(),
            sleep=self.sleep,
        )

    def _transport(self) -> GatewayTransport:
        return GatewayTransport(config=self.config, client_factory=self.client_factory)

    def _retries(self, retries: int | None) -> int:
        return self.config.default_retries if retries is None else retries

    async def send_multicast(
        self,
        message: Message,
        recipients: Sequence[RecipientId],
        *,
        retries: int | None = None,
    ) -> DispatchReport:
        async with self._transport() as transport:
            return await self._dispatcher(transport).dispatch(
                message, recipients, max_retries=self._retries(retries)
            )

    async def send_multicast_no_retry(
        self,
        message: Message,
        recipients: Sequence[RecipientId],
    ) -> AttemptResponse | None:
        async with self._transport() as transport:
            return await self._dispatcher(transport).dispatch_once(message, recipients)

    async def send(
        self,
        message: Message,
        recipient: RecipientId,
        *,
        retries: int | None = None,
    ) -> Outcome:
        async with self._transport() as transport:
            return await self._dispatcher(transport).send(
                message, recipient, max_retries=self._retries(retries)
            )

    async def send_no_retry(self, message: Message, recipient: RecipientId) -> Outcome | None:
        async with self._transport() as transport:
            return await self._dispatcher(transport).send_once(message, recipient)

    def send_multicast_sync(
        self,
        message: Message,
        recipients: Sequence[RecipientId],
        *,
        retries: int | None = None,
    ) -> DispatchReport:
        return asyncio.run(self.send_multicast(message, recipients, retries=retries))

    def send_sync(
        self,
        message: Message,
        recipient: RecipientId,
        *,
        retries: int | None = None,
    ) -> Outcome:
        return asyncio.run(self.send(message, recipient, retries=retries))

    def send_multicast_no_retry_sync(
        self,
        message: Message,
        recipients: Sequence[RecipientId],
    ) -> AttemptResponse | None:
        return asyncio.run(self.send_multicast_no_retry(message, recipients))

    def send_no_retry_sync(self, message: Message, recipient: RecipientId) -> Outcome | None:
        return asyncio.run(self.send_no_retry(message, recipient))
