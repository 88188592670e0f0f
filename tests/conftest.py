from __future__ import annotations

import pytest

from pushcast.config.gateway import GatewayConfig
from pushcast.config.http_resilience import ResilienceConfig, RetryPolicy
from pushcast.domain.backoff import BackoffScheduler
from pushcast.domain.model import Message, Notification
from tests.helpers.gateway import TEST_ENDPOINT
from tests.helpers.transport import FixedJitter, RecordingSleeper


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "PUSHCAST_API_KEY",
        "PUSHCAST_ENDPOINT",
        "PUSHCAST_RETRIES",
        "PUSHCAST_BACKOFF_SEED",
    ):
        # set first so teardown also removes values loaded from a .env during the test
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture
def jitter() -> FixedJitter:
    return FixedJitter(fraction=0.5)


@pytest.fixture
def scheduler(jitter: FixedJitter) -> BackoffScheduler:
    return BackoffScheduler(jitter=jitter)


@pytest.fixture
def sleeper() -> RecordingSleeper:
    return RecordingSleeper()


@pytest.fixture
def message() -> Message:
    return Message(
        collapse_key="updates",
        time_to_live=60,
        data={"score": "4x8"},
        notification=Notification(title="Match", body="Final score"),
    )


@pytest.fixture
def gateway_config() -> GatewayConfig:
    return GatewayConfig(
        api_key="test-key",
        endpoint=TEST_ENDPOINT,
        default_retries=2,
        resilience=ResilienceConfig(
            name="gateway-test",
            timeout_seconds=5.0,
            retry=RetryPolicy(total=0),
        ),
    )
