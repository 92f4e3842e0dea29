"""Interval rate limiter for backend requests."""

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol


DEFAULT_DELAY = 0.5


class RateLimiterProtocol(Protocol):
    """Protocol for rate limiters.

    Allows dependency injection of rate limiter for testing.
    """

    def wait(self) -> None:
        """Block until the next request may start."""
        ...

    def record_request(self) -> None:
        """Timestamp a request that was just sent."""
        ...


@dataclass
class IntervalRateLimiter:
    """Spaces request starts at least ``delay`` seconds apart.

    Each ``wait`` reserves the next free start slot under the lock and
    then sleeps outside it, so concurrent callers are queued at the
    configured cadence without serializing the HTTP calls themselves.

    Thread-safe implementation shared by every language job that uses
    the same backend instance.

    Attributes:
        delay: Minimum seconds between request starts.
    """

    delay: float = DEFAULT_DELAY
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)

    _last_request_time: float | None = field(init=False, default=None)
    _lock: threading.Lock = field(
        init=False, default_factory=threading.Lock, repr=False
    )
    _rate_limited_count: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        """Validate the configured delay."""
        if self.delay < 0:
            msg = f"Rate limit delay must be non-negative, got {self.delay}"
            raise ValueError(msg)

    def wait(self) -> None:
        """Block the caller until its start slot arrives."""
        with self._lock:
            now = self.clock()
            if self._last_request_time is None:
                slot = now
            else:
                slot = max(now, self._last_request_time + self.delay)
            self._last_request_time = slot
            wait_time = slot - now
            if wait_time > 0:
                self._rate_limited_count += 1

        # Release lock before sleeping
        if wait_time > 0:
            self.sleep(wait_time)

    def record_request(self) -> None:
        """Timestamp the most recent request start."""
        with self._lock:
            now = self.clock()
            if self._last_request_time is None or now > self._last_request_time:
                self._last_request_time = now

    def reset(self) -> None:
        """Forget the last request time and statistics."""
        with self._lock:
            self._last_request_time = None
            self._rate_limited_count = 0

    @property
    def was_rate_limited(self) -> bool:
        """Check if any caller had to wait since creation."""
        with self._lock:
            return self._rate_limited_count > 0

    @property
    def rate_limited_count(self) -> int:
        """Get the number of waits that actually slept."""
        with self._lock:
            return self._rate_limited_count
