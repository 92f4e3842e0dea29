"""Translation configuration loading and validation."""

from locale_translate.config.loader import ConfigLoader
from locale_translate.config.schema import (
    OutputFormat,
    TargetLanguage,
    TranslationConfig,
    TranslationMode,
)
from locale_translate.config.settings import ApiKeySettings, get_api_key_settings
from locale_translate.config.state_machine import (
    ConfigState,
    ConfigStateError,
    ConfigStateMachine,
)


__all__ = [
    "ApiKeySettings",
    "ConfigLoader",
    "ConfigState",
    "ConfigStateError",
    "ConfigStateMachine",
    "OutputFormat",
    "TargetLanguage",
    "TranslationConfig",
    "TranslationMode",
    "get_api_key_settings",
]
