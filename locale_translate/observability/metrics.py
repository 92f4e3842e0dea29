"""Metrics collection for translation runs."""

from collections import Counter
from dataclasses import dataclass, field
from threading import Lock


_metrics_instance: "TranslationMetrics | None" = None
_metrics_lock: Lock = Lock()


@dataclass
class TranslationMetrics:
    """Thread-safe metrics for translation operations.

    Tracks backend traffic, cache efficiency and per-language outcomes.
    Use get_instance() for singleton access.
    """

    _lock: Lock = field(default_factory=Lock, repr=False, compare=False)

    api_calls_total: int = 0
    retries_total: int = 0
    cache_hits_total: int = 0
    cache_misses_total: int = 0

    strings_by_language: Counter[str] = field(default_factory=Counter)
    failures_by_language_error: Counter[tuple[str, str]] = field(
        default_factory=Counter
    )
    duration_by_language: dict[str, float] = field(default_factory=dict)

    @classmethod
    def get_instance(cls) -> "TranslationMetrics":
        """Get the singleton instance (thread-safe).

        Returns:
            The shared TranslationMetrics instance.
        """
        global _metrics_instance  # noqa: PLW0603
        if _metrics_instance is None:
            with _metrics_lock:
                if _metrics_instance is None:
                    _metrics_instance = cls()
        return _metrics_instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance (for testing)."""
        global _metrics_instance  # noqa: PLW0603
        with _metrics_lock:
            _metrics_instance = None

    def record_api_call(self) -> None:
        """Record one HTTP request sent to a backend."""
        with self._lock:
            self.api_calls_total += 1

    def record_retry(self) -> None:
        """Record one retry after a transient failure."""
        with self._lock:
            self.retries_total += 1

    def record_cache_lookup(self, *, hit: bool) -> None:
        """Record a cache lookup outcome.

        Args:
            hit: Whether the lookup found a cached translation.
        """
        with self._lock:
            if hit:
                self.cache_hits_total += 1
            else:
                self.cache_misses_total += 1

    def record_strings(self, language: str, count: int) -> None:
        """Record strings translated for a language.

        Args:
            language: Target language code.
            count: Number of strings translated.
        """
        with self._lock:
            self.strings_by_language[language] += count

    def record_failure(self, language: str, error_type: str) -> None:
        """Record a failed language job.

        Args:
            language: Target language code.
            error_type: Name of the error that ended the job.
        """
        with self._lock:
            self.failures_by_language_error[(language, error_type)] += 1

    def record_duration(self, language: str, duration_ms: float) -> None:
        """Record job duration for a language.

        Args:
            language: Target language code.
            duration_ms: Duration in milliseconds.
        """
        with self._lock:
            self.duration_by_language[language] = duration_ms

    def get_failures_total(self, language: str | None = None) -> int:
        """Get total failures.

        Args:
            language: Optional language to filter by.

        Returns:
            Total failure count.
        """
        with self._lock:
            return sum(
                count
                for (lang, _), count in self.failures_by_language_error.items()
                if language is None or lang == language
            )

    def to_dict(self) -> dict[str, object]:
        """Export metrics as dictionary.

        Returns:
            Dictionary representation of all metrics.
        """
        with self._lock:
            return {
                "api_calls_total": self.api_calls_total,
                "retries_total": self.retries_total,
                "cache_hits_total": self.cache_hits_total,
                "cache_misses_total": self.cache_misses_total,
                "strings_by_language": dict(self.strings_by_language),
                "failures_by_language_error": {
                    f"{lang}:{error}": count
                    for (lang, error), count in self.failures_by_language_error.items()
                },
                "duration_by_language": dict(self.duration_by_language),
            }
