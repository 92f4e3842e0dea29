"""Translation orchestration: jobs, exclusions, merging and reporting."""

from locale_translate.translator.direct import DirectTranslator
from locale_translate.translator.exclusions import ExclusionSet
from locale_translate.translator.merge import merge
from locale_translate.translator.models import (
    TranslationJob,
    TranslationReport,
    TranslationResult,
)
from locale_translate.translator.orchestrator import Translator, split_translatable
from locale_translate.translator.state_machine import (
    JobState,
    JobStateError,
    JobStateMachine,
)


__all__ = [
    "DirectTranslator",
    "ExclusionSet",
    "JobState",
    "JobStateError",
    "JobStateMachine",
    "Translator",
    "TranslationJob",
    "TranslationReport",
    "TranslationResult",
    "merge",
    "split_translatable",
]
