"""Progress reporting for per-language translation jobs."""

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

import structlog


logger = structlog.get_logger()

_MAX_KEY_LENGTH = 40


@dataclass(frozen=True)
class ProgressEvent:
    """A single progress update.

    Attributes:
        language: Display name of the target language.
        current_key: Key (or batch label) being translated.
        progress: Completion percentage, 0.0 to 100.0.
        elapsed_seconds: Seconds since the job started.
        remaining_seconds: Estimated seconds until completion.
    """

    language: str
    current_key: str
    progress: float
    elapsed_seconds: float
    remaining_seconds: float


class ProgressReporter(Protocol):
    """Protocol for receiving strategy progress updates."""

    def update(self, language: str, current_key: str, progress: float) -> None:
        """Report progress for a language.

        Args:
            language: Display name of the target language.
            current_key: Key or batch label being translated.
            progress: Completion percentage.
        """
        ...


class ProgressTracker:
    """Tracks elapsed and remaining time for a translation job.

    Every update is logged at debug level and forwarded to an optional
    callback, which the CLI uses for terminal output.
    """

    def __init__(
        self,
        enabled: bool = True,
        callback: Callable[[ProgressEvent], None] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the tracker.

        Args:
            enabled: Whether updates are emitted at all.
            callback: Optional receiver for progress events.
            clock: Monotonic time source.
        """
        self.enabled = enabled
        self._callback = callback
        self._clock = clock
        self._start_time = clock()
        self._last_event: ProgressEvent | None = None
        self._log = logger.bind(component="progress")

    @property
    def last_event(self) -> ProgressEvent | None:
        """Get the most recent progress event."""
        return self._last_event

    def update(self, language: str, current_key: str, progress: float) -> None:
        """Record a progress update.

        Args:
            language: Display name of the target language.
            current_key: Key or batch label being translated.
            progress: Completion percentage.
        """
        if not self.enabled:
            return

        elapsed = self._clock() - self._start_time
        estimated_total = elapsed / (progress / 100.0) if progress > 0 else 0.0
        event = ProgressEvent(
            language=language,
            current_key=truncate(current_key, _MAX_KEY_LENGTH),
            progress=progress,
            elapsed_seconds=elapsed,
            remaining_seconds=max(estimated_total - elapsed, 0.0),
        )
        self._last_event = event

        self._log.debug(
            "translation_progress",
            language=language,
            current_key=event.current_key,
            progress=progress,
            elapsed=format_duration(elapsed),
            remaining=format_duration(event.remaining_seconds),
        )
        if self._callback is not None:
            self._callback(event)

    def complete(self, language: str, total_strings: int) -> None:
        """Log job completion.

        Args:
            language: Display name of the target language.
            total_strings: Number of strings translated.
        """
        if not self.enabled:
            return
        elapsed = self._clock() - self._start_time
        self._log.info(
            "translation_language_complete",
            language=language,
            total_strings=total_strings,
            elapsed=format_duration(elapsed),
        )

    def error(self, language: str, error: Exception) -> None:
        """Log job failure.

        Args:
            language: Display name of the target language.
            error: Error that ended the job.
        """
        if not self.enabled:
            return
        self._log.warning(
            "translation_language_failed",
            language=language,
            error=str(error),
        )

    def reset(self) -> None:
        """Restart the elapsed-time clock."""
        self._start_time = self._clock()
        self._last_event = None


def format_duration(seconds: float) -> str:
    """Format seconds as a short human duration.

    Args:
        seconds: Duration in seconds.

    Returns:
        String such as ``"0s"``, ``"42s"`` or ``"3m 5s"``.
    """
    if seconds <= 0:
        return "0s"
    minutes, secs = divmod(int(seconds), 60)
    if minutes:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def truncate(text: str, max_length: int) -> str:
    """Shorten text to max_length, marking the cut with an ellipsis."""
    if len(text) <= max_length:
        return text
    return f"{text[: max_length - 3]}..."
