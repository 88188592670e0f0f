"""HTTP transport for the push gateway's JSON send endpoint."""

from __future__ import annotations

import json
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from pushcast.adapters.http_resilience import ResilientClient
from pushcast.domain.errors import MalformedResponseError, ProtocolError
from pushcast.domain.ports.transport import TransientUnavailable

from .schema import SendResponse
from .translator import build_send_request, parse_attempt_response

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from types import TracebackType

    from pushcast.config.gateway import GatewayConfig
    from pushcast.config.http_resilience import ResilienceConfig
    from pushcast.domain.model import Message, RecipientId
    from pushcast.domain.results import AttemptResponse

log = getLogger(__name__)

type ClientFactory = Callable[[ResilienceConfig], ResilientClient]


class GatewayTransport:
    """Posts one batch per call to the gateway.

    Can be used as an async context manager to keep a single connection pool across the
    attempts of a dispatch; otherwise a client is opened per request.
    """

    def __init__(
        self,
        *,
        config: GatewayConfig,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._client: ResilientClient | None = None
        if not config.endpoint.startswith("https://"):
            log.warning("Gateway endpoint does not use https: %s", config.endpoint)

    async def __aenter__(self) -> GatewayTransport:
        self._client = self._client_factory(self._resilience)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def post(
        self,
        message: Message,
        recipients: Sequence[RecipientId],
    ) -> AttemptResponse | TransientUnavailable:
        body = build_send_request(message, recipients).to_json_body()
        log.debug("Posting to %s for %s recipients", self._config.endpoint, len(recipients))

        if self._client is not None:
            return await self._perform_request(client=self._client, body=body)
        async with self._client_factory(self._resilience) as client:
            return await self._perform_request(client=client, body=body)

    async def _perform_request(
        self,
        *,
        client: ResilientClient,
        body: dict[str, object],
    ) -> AttemptResponse | TransientUnavailable:
        try:
            response = await client.post(
                self._config.endpoint,
                json=body,
                headers={"Authorization": f"key={self._config.api_key}"},
            )
        except httpx.TransportError as exc:
            log.debug("Transport error posting to gateway: %r", exc)
            return TransientUnavailable(reason=f"{type(exc).__name__}: {exc}")

        if response.status_code != httpx.codes.OK:
            raise ProtocolError(response.status_code, _response_text(response))

        text = _response_text(response)
        try:
            payload = response.json()
            parsed = SendResponse.model_validate(payload)
        except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as exc:
            msg = f"Error parsing JSON response ({text})"
            log.warning("%s: %s", msg, exc)
            raise MalformedResponseError(msg, body=text) from exc

        log.debug("Gateway response: %s", text)
        return parse_attempt_response(parsed)


def _response_text(response: httpx.Response) -> str:
    try:
        return response.text
    except (httpx.ResponseNotRead, UnicodeDecodeError):
        return "N/A"
