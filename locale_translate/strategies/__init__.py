"""Per-language dispatch strategies."""

from locale_translate.strategies.base import BaseStrategy, StrategyKind
from locale_translate.strategies.batch import BatchStrategy, create_batches
from locale_translate.strategies.deep import DeepStrategy
from locale_translate.strategies.selector import (
    DEEP_STRATEGY_THRESHOLD,
    create_strategy,
    select_strategy,
    select_strategy_kind,
)


__all__ = [
    "DEEP_STRATEGY_THRESHOLD",
    "BaseStrategy",
    "BatchStrategy",
    "DeepStrategy",
    "StrategyKind",
    "create_batches",
    "create_strategy",
    "select_strategy",
    "select_strategy_kind",
]
