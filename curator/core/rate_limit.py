"""Fixed-window Rate Limiter — in-process request budget keyed by client IP.

Invariants:
    - At most `limit` allowed calls per key per window
    - A window starts on the first call for a key and resets lazily: the first
      call after reset_at opens a new window with count 1
    - Not durable, not shared across processes

Design Decisions:
    - Module-level limiter instances in routes (ADR: single-process uvicorn;
      a shared store such as Redis is the multi-instance upgrade path)
    - Injectable clock: tests advance time without sleeping
"""

import time
from dataclasses import dataclass
from typing import Callable


@dataclass
class _Window:
    count: int
    reset_at: float


class FixedWindowRateLimiter:
    """Allow `limit` calls per `window_seconds` for each key."""

    def __init__(
        self,
        limit: int,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, _Window] = {}

    def check(self, key: str) -> bool:
        """Record a call for `key`; False when the budget is exhausted."""
        now = self._clock()
        window = self._windows.get(key)
        if window is None or now > window.reset_at:
            self._windows[key] = _Window(1, now + self.window_seconds)
            return True
        if window.count >= self.limit:
            return False
        window.count += 1
        return True

    def retry_after_ms(self, key: str) -> int | None:
        """Milliseconds until `key` gets a fresh window (None if untracked)."""
        window = self._windows.get(key)
        if window is None:
            return None
        return max(0, int((window.reset_at - self._clock()) * 1000))

    def reset(self) -> None:
        self._windows.clear()
