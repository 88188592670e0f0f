from __future__ import annotations

import httpx
import pytest

from pushcast.adapters.gateway import GatewaySender
from pushcast.config.backoff import BackoffConfig
from pushcast.config.gateway import GatewayConfig
from pushcast.domain.errors import ProtocolError, TransportExhaustedError
from pushcast.domain.model import Delivered, Failed, Message
from tests.helpers.gateway import TEST_ENDPOINT, gateway_reply, make_client_factory, replay
from tests.helpers.transport import RecordingSleeper


def _sender(
    config: GatewayConfig,
    sleeper: RecordingSleeper,
    *replies: httpx.Response | Exception,
) -> tuple[GatewaySender, list[httpx.Request]]:
    handler, requests = replay(*replies)
    sender = GatewaySender(
        config=config,
        backoff=BackoffConfig(seed=7),
        client_factory=make_client_factory(handler),
        sleep=sleeper,
    )
    return sender, requests


def test_send_multicast_retries_unavailable_recipients(
    gateway_config: GatewayConfig,
    message: Message,
    sleeper: RecordingSleeper,
) -> None:
    sender, requests = _sender(
        gateway_config,
        sleeper,
        httpx.Response(
            200,
            json=gateway_reply(
                11,
                [
                    {"message_id": "0:a"},
                    {"error": "Unavailable"},
                    {"message_id": "0:c", "registration_id": "c-new"},
                ],
            ),
        ),
        httpx.Response(200, json=gateway_reply(12, [{"message_id": "0:b"}])),
    )

    report = sender.send_multicast_sync(message, ["a", "b", "c"])

    assert report.outcomes == [
        Delivered(message_id="0:a"),
        Delivered(message_id="0:b"),
        Delivered(message_id="0:c", canonical_id="c-new"),
    ]
    assert report.attempt_ids == [11, 12]
    assert report.canonical_replacements() == {"c": "c-new"}
    assert len(requests) == 2
    assert len(sleeper.delays) == 1
    assert 0.5 <= sleeper.delays[0] < 1.5


def test_send_multicast_uses_configured_default_retries(
    gateway_config: GatewayConfig,
    message: Message,
    sleeper: RecordingSleeper,
) -> None:
    request = httpx.Request("POST", TEST_ENDPOINT)
    sender, requests = _sender(
        gateway_config,
        sleeper,
        *[httpx.ConnectError("refused", request=request) for _ in range(3)],
    )

    with pytest.raises(TransportExhaustedError):
        sender.send_multicast_sync(message, ["a"])

    assert gateway_config.default_retries == 2
    assert len(requests) == 3
    assert len(sleeper.delays) == 2


def test_server_error_status_is_retried(
    gateway_config: GatewayConfig,
    message: Message,
    sleeper: RecordingSleeper,
) -> None:
    sender, requests = _sender(
        gateway_config,
        sleeper,
        httpx.Response(503, text="busy"),
        httpx.Response(200, json=gateway_reply(5, [{"error": "InvalidRegistration"}])),
    )

    report = sender.send_multicast_sync(message, ["a"], retries=1)

    assert report.outcomes == [Failed(error="InvalidRegistration")]
    assert report.attempt_id == 5
    assert len(requests) == 2


def test_no_retry_variants_make_exactly_one_request(
    gateway_config: GatewayConfig,
    message: Message,
    sleeper: RecordingSleeper,
) -> None:
    sender, requests = _sender(
        gateway_config,
        sleeper,
        httpx.Response(200, json=gateway_reply(3, [{"error": "Unavailable"}])),
        httpx.Response(401, text="denied"),
    )

    outcome = sender.send_no_retry_sync(message, "a")
    with pytest.raises(ProtocolError):
        sender.send_multicast_no_retry_sync(message, ["a"])

    assert outcome == Failed(error="Unavailable")
    assert len(requests) == 2
    assert sleeper.delays == []


def test_send_returns_single_outcome(
    gateway_config: GatewayConfig,
    message: Message,
    sleeper: RecordingSleeper,
) -> None:
    sender, _ = _sender(
        gateway_config,
        sleeper,
        httpx.Response(200, json=gateway_reply(3, [])),
        httpx.Response(200, json=gateway_reply(4, [{"message_id": "0:1"}])),
    )

    outcome = sender.send_sync(message, "a", retries=1)

    assert outcome == Delivered(message_id="0:1")
    assert len(sleeper.delays) == 1
