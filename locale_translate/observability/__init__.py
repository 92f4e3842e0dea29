"""Observability module for logging, metrics and progress."""

from locale_translate.observability.logging import bind_run_context, configure_logging
from locale_translate.observability.metrics import TranslationMetrics
from locale_translate.observability.progress import (
    ProgressEvent,
    ProgressReporter,
    ProgressTracker,
)


__all__ = [
    "ProgressEvent",
    "ProgressReporter",
    "ProgressTracker",
    "TranslationMetrics",
    "bind_run_context",
    "configure_logging",
]
