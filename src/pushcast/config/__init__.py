"""Application configuration helpers."""

from __future__ import annotations

from .backoff import BackoffConfig, get_backoff_config
from .env import optional_env_int, optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .gateway import (
    DEFAULT_GATEWAY_ENDPOINT,
    DEFAULT_RETRIES,
    GatewayConfig,
    default_gateway_resilience,
    get_gateway_config,
)
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging

__all__ = [
    "DEFAULT_GATEWAY_ENDPOINT",
    "DEFAULT_RETRIES",
    "BackoffConfig",
    "ConfigurationError",
    "GatewayConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "default_gateway_resilience",
    "get_backoff_config",
    "get_gateway_config",
    "optional_env_int",
    "optional_env_var",
    "require_env_vars",
]
