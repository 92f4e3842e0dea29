"""Selects the translation strategy based on content size."""

from locale_translate.observability.progress import ProgressReporter
from locale_translate.providers.protocols import TranslationBackend
from locale_translate.strategies.base import BaseStrategy, StrategyKind
from locale_translate.strategies.batch import DEFAULT_BATCH_SIZE, BatchStrategy
from locale_translate.strategies.deep import DeepStrategy


DEEP_STRATEGY_THRESHOLD = 50


def select_strategy_kind(
    strings_count: int, threshold: int = DEEP_STRATEGY_THRESHOLD
) -> StrategyKind:
    """Pick the dispatch algorithm for a number of strings.

    Args:
        strings_count: Number of strings to translate.
        threshold: Counts below this use the deep strategy.

    Returns:
        StrategyKind.DEEP for small inputs, StrategyKind.BATCH otherwise.
    """
    if strings_count < threshold:
        return StrategyKind.DEEP
    return StrategyKind.BATCH


def create_strategy(
    kind: StrategyKind,
    provider: TranslationBackend,
    progress: ProgressReporter | None = None,
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> BaseStrategy:
    """Instantiate a strategy.

    Args:
        kind: Strategy to build.
        provider: Translation backend.
        progress: Optional receiver for progress updates.
        batch_size: Chunk size for the batch strategy.

    Returns:
        Strategy instance.
    """
    if kind == StrategyKind.DEEP:
        return DeepStrategy(provider, progress)
    return BatchStrategy(provider, progress, batch_size=batch_size)


def select_strategy(
    strings_count: int,
    provider: TranslationBackend,
    progress: ProgressReporter | None = None,
    *,
    threshold: int = DEEP_STRATEGY_THRESHOLD,
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> BaseStrategy:
    """Select and instantiate the strategy for a number of strings.

    Args:
        strings_count: Number of strings to translate.
        provider: Translation backend.
        progress: Optional receiver for progress updates.
        threshold: Deep/batch switch-over count.
        batch_size: Chunk size for the batch strategy.

    Returns:
        Strategy instance.
    """
    kind = select_strategy_kind(strings_count, threshold)
    return create_strategy(kind, provider, progress, batch_size)
