"""Job, result and report models for translation runs."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from locale_translate.config.schema import TargetLanguage
from locale_translate.locale_io.writer import WriteSummary
from locale_translate.strategies.base import StrategyKind


@dataclass
class TranslationJob:
    """Work unit for one target language.

    Attributes:
        language: Target language.
        strings: Translatable dot-key to text map, after exclusions.
        passthrough: Values copied unchanged (non-text or blank).
        existing: Flat content of the current target file.
        strategy: Strategy chosen for dispatch, once known.
    """

    language: TargetLanguage
    strings: dict[str, str] = field(default_factory=dict)
    passthrough: dict[str, Any] = field(default_factory=dict)
    existing: dict[str, Any] = field(default_factory=dict)
    strategy: StrategyKind | None = None


@dataclass(frozen=True)
class TranslationResult:
    """Outcome of one language job.

    Attributes:
        language: Target language.
        succeeded: Whether the job reached DONE.
        translated: Final flat map handed to the writer; empty on failure.
        error: Error message when the job failed.
        error_type: Error class name when the job failed.
        strategy: Strategy used, if dispatch happened.
        strings_count: Number of strings sent for translation.
        output_path: File written, or that would be written in dry-run.
        write_summary: Diff summary returned by the writer.
        duration_ms: Wall time of the job.
    """

    language: TargetLanguage
    succeeded: bool
    translated: dict[str, Any] = field(default_factory=dict)
    error: str | None = None
    error_type: str | None = None
    strategy: StrategyKind | None = None
    strings_count: int = 0
    output_path: Path | None = None
    write_summary: WriteSummary | None = None
    duration_ms: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "language": self.language.code,
            "succeeded": self.succeeded,
            "error": self.error,
            "error_type": self.error_type,
            "strategy": self.strategy.value if self.strategy else None,
            "strings_count": self.strings_count,
            "output_path": str(self.output_path) if self.output_path else None,
            "duration_ms": round(self.duration_ms, 2),
        }


@dataclass
class TranslationReport:
    """Aggregate outcome of a run.

    Attributes:
        results: Per-language results in configured language order.
        duration: Total wall time in seconds.
    """

    results: list[TranslationResult] = field(default_factory=list)
    duration: float = 0.0

    @property
    def success_count(self) -> int:
        """Number of languages that completed."""
        return sum(1 for result in self.results if result.succeeded)

    @property
    def failure_count(self) -> int:
        """Number of languages that failed."""
        return sum(1 for result in self.results if not result.succeeded)

    @property
    def errors(self) -> list[dict[str, str]]:
        """Failures as ``{language, error}`` entries."""
        return [
            {"language": result.language.code, "error": result.error or ""}
            for result in self.results
            if not result.succeeded
        ]

    @property
    def succeeded(self) -> bool:
        """Whether every language completed."""
        return self.failure_count == 0

    def result_for(self, language_code: str) -> TranslationResult | None:
        """Get the result for a language code."""
        for result in self.results:
            if result.language.code == language_code:
                return result
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "success_count": self.success_count,
            "failure_count": self.failure_count,
            "errors": self.errors,
            "duration": round(self.duration, 3),
            "results": [result.to_dict() for result in self.results],
        }
