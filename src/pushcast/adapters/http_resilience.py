"""HTTP client used by gateway adapters.

Wraps ``httpx.AsyncClient`` with connection-level retries from ``httpx_retries`` and an optional
``aiolimiter`` rate limit shared by every request made through the same client.
"""

from __future__ import annotations

from contextlib import asynccontextmanager, nullcontext
from logging import getLogger
from typing import TYPE_CHECKING, TypedDict, Unpack

import httpx
from aiolimiter import AsyncLimiter
from httpx_retries import Retry, RetryTransport

from pushcast.config.http_resilience import RateLimit, ResilienceConfig, RetryPolicy

if TYPE_CHECKING:
    from collections.abc import AsyncIterator
    from types import TracebackType

    from httpx._types import HeaderTypes, TimeoutTypes

__all__ = [
    "PostOptions",
    "RateLimit",
    "ResilienceConfig",
    "ResilientClient",
    "RetryPolicy",
    "build_retry",
]

log = getLogger(__name__)


class PostOptions(TypedDict, total=False):
    json: object
    content: bytes | str
    headers: HeaderTypes
    timeout: TimeoutTypes


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.total,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        allowed_methods=tuple(policy.allowed_methods),
        status_forcelist=tuple(policy.status_forcelist),
        retry_on_exceptions=policy.retry_on_exceptions,
        backoff_jitter=policy.backoff_jitter,
    )


class ResilientClient:
    """Async client honouring a ``ResilienceConfig``.

    ``transport`` replaces the network transport underneath the retry layer, which lets tests
    plug in ``httpx.MockTransport`` while still exercising retries and rate limiting.
    """

    def __init__(
        self,
        config: ResilienceConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._limiter = (
            AsyncLimiter(config.ratelimit.max_calls, config.ratelimit.per_seconds)
            if config.ratelimit is not None
            else None
        )
        self._client = httpx.AsyncClient(
            base_url=config.base_url or "",
            timeout=config.timeout_seconds,
            headers=dict(config.default_headers or {}),
            transport=RetryTransport(
                transport=transport or httpx.AsyncHTTPTransport(),
                retry=build_retry(config.retry),
            ),
            event_hooks={"response": [self._log_response]},
        )

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def aclose(self) -> None:
        await self._client.aclose()

    async def post(self, url: str, **options: Unpack[PostOptions]) -> httpx.Response:
        async with self._throttle():
            return await self._client.post(url, **options)

    @asynccontextmanager
    async def _throttle(self) -> AsyncIterator[None]:
        async with self._limiter if self._limiter is not None else nullcontext():
            yield

    async def _log_response(self, response: httpx.Response) -> None:
        log.debug(
            "[%s] %s %s -> %s",
            self.config.name,
            response.request.method,
            response.request.url,
            response.status_code,
        )
