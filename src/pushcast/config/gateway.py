"""Messaging gateway configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from .env import optional_env_int, optional_env_var, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_GATEWAY_ENDPOINT: Final[str] = "https://fcm.googleapis.com/fcm/send"
DEFAULT_GATEWAY_TIMEOUT_SECONDS: Final[float] = 30.0
DEFAULT_RETRIES: Final[int] = 5


def default_gateway_resilience(endpoint: str = DEFAULT_GATEWAY_ENDPOINT) -> ResilienceConfig:
    return ResilienceConfig(
        name="gateway",
        base_url=endpoint,
        timeout_seconds=DEFAULT_GATEWAY_TIMEOUT_SECONDS,
        retry=RetryPolicy(),
        ratelimit=RateLimit(max_calls=50, per_seconds=1.0),
        default_headers={"Content-Type": "application/json"},
    )


@dataclass(frozen=True, slots=True)
class GatewayConfig:
    """Credentials and endpoint for the push gateway."""

    api_key: str
    endpoint: str = DEFAULT_GATEWAY_ENDPOINT
    default_retries: int = DEFAULT_RETRIES
    resilience: ResilienceConfig = field(default_factory=default_gateway_resilience)

    def __repr__(self) -> str:
        return (
            f"GatewayConfig(api_key='***', endpoint={self.endpoint!r}, "
            f"default_retries={self.default_retries})"
        )


def get_gateway_config(*, resilience: ResilienceConfig | None = None) -> GatewayConfig:
    values = require_env_vars(("PUSHCAST_API_KEY",))
    endpoint = optional_env_var("PUSHCAST_ENDPOINT", DEFAULT_GATEWAY_ENDPOINT)
    retries = optional_env_int("PUSHCAST_RETRIES", minimum=0)
    return GatewayConfig(
        api_key=values["PUSHCAST_API_KEY"],
        endpoint=endpoint,
        default_retries=DEFAULT_RETRIES if retries is None else retries,
        resilience=resilience or default_gateway_resilience(endpoint),
    )
