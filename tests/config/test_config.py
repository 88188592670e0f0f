from __future__ import annotations

import pytest

from pushcast.config import (
    DEFAULT_GATEWAY_ENDPOINT,
    DEFAULT_RETRIES,
    BackoffConfig,
    ConfigurationError,
    MissingConfigurationError,
    get_backoff_config,
    get_gateway_config,
    optional_env_int,
    require_env_vars,
)
from pushcast.config.http_resilience import ResilienceConfig


def test_require_env_vars_returns_stripped_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "  value ")

    assert require_env_vars(["EXAMPLE_VAR"]) == {"EXAMPLE_VAR": "value"}


def test_require_env_vars_reports_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("B_VAR", "   ")
    monkeypatch.delenv("A_VAR", raising=False)

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["B_VAR", "A_VAR"])

    assert exc.value.names == ("A_VAR", "B_VAR")
    assert "A_VAR, B_VAR" in str(exc.value)


def test_gateway_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PUSHCAST_API_KEY", "secret")

    config = get_gateway_config()

    assert config.api_key == "secret"
    assert config.endpoint == DEFAULT_GATEWAY_ENDPOINT
    assert config.default_retries == DEFAULT_RETRIES
    assert config.resilience.base_url == DEFAULT_GATEWAY_ENDPOINT
    assert config.resilience.ratelimit is not None
    assert "secret" not in repr(config)


def test_gateway_config_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PUSHCAST_API_KEY", "secret")
    monkeypatch.setenv("PUSHCAST_ENDPOINT", "https://push.example/send")
    monkeypatch.setenv("PUSHCAST_RETRIES", "0")
    resilience = ResilienceConfig(name="custom")

    config = get_gateway_config(resilience=resilience)

    assert config.endpoint == "https://push.example/send"
    assert config.default_retries == 0
    assert config.resilience is resilience


def test_gateway_config_requires_api_key() -> None:
    with pytest.raises(MissingConfigurationError, match="PUSHCAST_API_KEY"):
        get_gateway_config()


@pytest.mark.parametrize("raw", ["many", "-1"])
def test_gateway_config_rejects_bad_retries(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("PUSHCAST_API_KEY", "secret")
    monkeypatch.setenv("PUSHCAST_RETRIES", raw)

    with pytest.raises(ConfigurationError, match="PUSHCAST_RETRIES"):
        get_gateway_config()


def test_optional_env_int_treats_blank_as_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SOME_INT", " ")

    assert optional_env_int("SOME_INT") is None


def test_backoff_config_reads_seed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PUSHCAST_BACKOFF_SEED", "99")

    config = get_backoff_config()
    first = config.build()
    second = config.build()

    assert config == BackoffConfig(seed=99)
    assert first.next_delay(1000) == second.next_delay(1000)
