"""Fixed-window rate limiting for contact form submissions.

State lives in process memory and resets on restart.
"""

from __future__ import annotations

from dataclasses import dataclass
from threading import Lock
import time
from typing import Callable, Optional


@dataclass
class RateLimitEntry:
    count: int
    reset_time: float


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    remaining: int
    reset_time: float


@dataclass(frozen=True)
class RateLimitStatus:
    count: int
    remaining: int
    reset_time: Optional[float]


@dataclass(frozen=True)
class RateLimitConfig:
    max_requests: int
    window_seconds: float


class FixedWindowRateLimiter:
    """Counts submissions per client identifier inside a fixed time window."""

    def __init__(
        self,
        max_requests: int = 5,
        window_seconds: float = 60 * 60,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = RateLimitConfig(max_requests=max_requests, window_seconds=window_seconds)
        self._clock = clock
        self._entries: dict[str, RateLimitEntry] = {}
        self._lock = Lock()

    @property
    def config(self) -> RateLimitConfig:
        return self._config

    def check_rate_limit(self, identifier: str) -> RateLimitResult:
        """Record one attempt for ``identifier`` and report whether it may proceed."""

        max_requests = self._config.max_requests
        with self._lock:
            now = self._clock()
            entry = self._entries.get(identifier)

            if entry is None or now >= entry.reset_time:
                entry = RateLimitEntry(count=1, reset_time=now + self._config.window_seconds)
                self._entries[identifier] = entry
                return RateLimitResult(allowed=True, remaining=max_requests - 1, reset_time=entry.reset_time)

            # Blocked attempts do not inflate the counter.
            if entry.count >= max_requests:
                return RateLimitResult(allowed=False, remaining=0, reset_time=entry.reset_time)

            entry.count += 1
            return RateLimitResult(
                allowed=True,
                remaining=max_requests - entry.count,
                reset_time=entry.reset_time,
            )

    def get_rate_limit_status(self, identifier: str) -> RateLimitStatus:
        """Current usage for ``identifier`` without counting an attempt."""

        max_requests = self._config.max_requests
        with self._lock:
            now = self._clock()
            entry = self._entries.get(identifier)
            if entry is None or now >= entry.reset_time:
                return RateLimitStatus(count=0, remaining=max_requests, reset_time=None)
            return RateLimitStatus(
                count=entry.count,
                remaining=max(0, max_requests - entry.count),
                reset_time=entry.reset_time,
            )

    def reset_rate_limit(self, identifier: str) -> None:
        with self._lock:
            self._entries.pop(identifier, None)

    def clear_all_rate_limits(self) -> None:
        with self._lock:
            self._entries.clear()
