"""Retry policy with exponential backoff and multiplicative jitter."""

import random
from dataclasses import dataclass

from locale_translate.errors import ApiError


DEFAULT_MAX_RETRIES = 3
DEFAULT_BASE_DELAY = 2.0
MAX_BACKOFF_DELAY = 60.0
MAX_JITTER = 0.3


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retry policy for backend calls.

    Attributes:
        max_attempts: Total attempts including the first one.
        base_delay: Delay before the first retry, in seconds.
        max_delay: Upper bound on any single delay.
        max_jitter: Upper bound of the random multiplicative jitter.
    """

    max_attempts: int = DEFAULT_MAX_RETRIES
    base_delay: float = DEFAULT_BASE_DELAY
    max_delay: float = MAX_BACKOFF_DELAY
    max_jitter: float = MAX_JITTER

    def __post_init__(self) -> None:
        """Clamp attempts so that at least one call is made."""
        if self.max_attempts < 1:
            object.__setattr__(self, "max_attempts", 1)

    def compute_backoff(self, attempt: int, jitter: float = 0.0) -> float:
        """Compute the delay after a failed attempt.

        Args:
            attempt: 1-based number of the attempt that just failed.
            jitter: Fraction in ``[0, max_jitter)`` added multiplicatively.

        Returns:
            Delay in seconds, capped at ``max_delay``.
        """
        delay = self.base_delay * (2 ** (attempt - 1)) * (1 + jitter)
        return min(delay, self.max_delay)

    def next_delay(self, attempt: int, rng: random.Random | None = None) -> float:
        """Compute the delay after a failed attempt with random jitter.

        Args:
            attempt: 1-based number of the attempt that just failed.
            rng: Random source; the module-level generator when omitted.

        Returns:
            Delay in seconds.
        """
        source = rng or random
        jitter = source.uniform(0, self.max_jitter)  # noqa: S311
        return self.compute_backoff(attempt, jitter)

    def should_retry(self, error: Exception, attempt: int) -> bool:
        """Decide whether another attempt is allowed.

        Args:
            error: Failure from the attempt that just ran.
            attempt: 1-based number of that attempt.

        Returns:
            True if the error is transient and attempts remain.
        """
        return is_retryable(error) and attempt < self.max_attempts


def is_retryable(error: Exception) -> bool:
    """Check whether an error is classified as transient."""
    return isinstance(error, ApiError) and error.retryable
