"""Jittered exponential backoff between dispatch attempts."""

from __future__ import annotations

import random
import threading
from dataclasses import dataclass, field
from typing import Final, Protocol, runtime_checkable

BACKOFF_INITIAL_DELAY: Final[int] = 1000
MAX_BACKOFF_DELAY: Final[int] = 1024000


@runtime_checkable
class JitterSource(Protocol):
    """Source of uniform integers in ``[0, stop)``; must be safe for concurrent use."""

    def randrange(self, stop: int, /) -> int: ...


class LockedRandom:
    """Seedable ``random.Random`` whose draws are serialized by a lock."""

    def __init__(self, seed: int | None = None) -> None:
        self._random = random.Random(seed)  # noqa: S311
        self._lock = threading.Lock()

    def randrange(self, stop: int, /) -> int:
        with self._lock:
            return self._random.randrange(stop)


@dataclass(slots=True)
class BackoffScheduler:
    """Computes how long to wait before the next attempt and how the backoff grows.

    The sleep is drawn from ``[current / 2, current * 1.5)``. The backoff doubles until doubling
    would reach ``max_delay``; from then on it stays put and waits keep the same jitter range.
    """

    jitter: JitterSource = field(default_factory=LockedRandom)
    initial_delay: int = BACKOFF_INITIAL_DELAY
    max_delay: int = MAX_BACKOFF_DELAY

    def __post_init__(self) -> None:
        if self.initial_delay <= 0:
            raise ValueError("initial_delay must be positive")
        if self.max_delay < self.initial_delay:
            raise ValueError("max_delay must not be smaller than initial_delay")

    def next_delay(self, current_backoff: int) -> tuple[int, int]:
        """Return ``(sleep_millis, new_backoff)`` for the given backoff."""

        sleep_millis = current_backoff // 2 + self.jitter.randrange(current_backoff)
        new_backoff = current_backoff
        if current_backoff * 2 < self.max_delay:
            new_backoff = current_backoff * 2
        return sleep_millis, new_backoff
