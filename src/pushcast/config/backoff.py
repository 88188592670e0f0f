"""Retry backoff settings."""

from __future__ import annotations

from dataclasses import dataclass

from pushcast.domain.backoff import (
    BACKOFF_INITIAL_DELAY,
    MAX_BACKOFF_DELAY,
    BackoffScheduler,
    LockedRandom,
)

from .env import optional_env_int


@dataclass(frozen=True, slots=True)
class BackoffConfig:
    initial_delay_ms: int = BACKOFF_INITIAL_DELAY
    max_delay_ms: int = MAX_BACKOFF_DELAY
    seed: int | None = None

    def build(self) -> BackoffScheduler:
        return BackoffScheduler(
            jitter=LockedRandom(self.seed),
            initial_delay=self.initial_delay_ms,
            max_delay=self.max_delay_ms,
        )


def get_backoff_config() -> BackoffConfig:
    return BackoffConfig(seed=optional_env_int("PUSHCAST_BACKOFF_SEED"))
