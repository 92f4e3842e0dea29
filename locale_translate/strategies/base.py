"""Base class for per-language translation strategies."""

from abc import ABC, abstractmethod
from enum import Enum

import structlog

from locale_translate.observability.progress import ProgressReporter
from locale_translate.providers.protocols import TranslationBackend


logger = structlog.get_logger()


class StrategyKind(str, Enum):
    """Dispatch algorithm for a language job.

    - DEEP: one backend call per string, fine-grained progress
    - BATCH: one backend call per fixed-size chunk
    """

    DEEP = "deep"
    BATCH = "batch"


class BaseStrategy(ABC):
    """Translates a flat key/text map through a backend.

    Implementations must return exactly the input key set, in input
    order, and let any backend failure propagate.
    """

    kind: StrategyKind

    def __init__(
        self,
        provider: TranslationBackend,
        progress: ProgressReporter | None = None,
    ) -> None:
        """Initialize the strategy.

        Args:
            provider: Translation backend.
            progress: Optional receiver for progress updates.
        """
        self.provider = provider
        self.progress = progress
        self._log = logger.bind(component="strategy", subcomponent=self.kind.value)

    @abstractmethod
    def translate(
        self,
        strings: dict[str, str],
        target_lang_code: str,
        target_lang_name: str,
    ) -> dict[str, str]:
        """Translate every value of a flat map.

        Args:
            strings: Dot-key to source text, in source order.
            target_lang_code: Target language code.
            target_lang_name: Target language display name.

        Returns:
            Dot-key to translated text with the same keys.
        """

    def _report(self, language: str, current_key: str, progress: float) -> None:
        if self.progress is not None:
            self.progress.update(language, current_key, progress)


def percent(done: int, total: int) -> float:
    """Completion percentage rounded to one decimal."""
    if total <= 0:
        return 100.0
    return round(done / total * 100.0, 1)
