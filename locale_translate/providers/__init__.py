"""Translation backends: HTTP providers, rate limiting and retries."""

from locale_translate.providers.anthropic_provider import AnthropicProvider
from locale_translate.providers.base import (
    BaseHttpProvider,
    HttpRequest,
    ProviderOptions,
    classify_response,
)
from locale_translate.providers.factory import (
    available_providers,
    create_provider,
    create_provider_from_config,
    register_provider,
)
from locale_translate.providers.gemini_provider import GeminiProvider
from locale_translate.providers.openai_provider import OpenAIProvider
from locale_translate.providers.protocols import TranslationBackend
from locale_translate.providers.rate_limiter import IntervalRateLimiter
from locale_translate.providers.retry import RetryPolicy


__all__ = [
    "AnthropicProvider",
    "BaseHttpProvider",
    "GeminiProvider",
    "HttpRequest",
    "IntervalRateLimiter",
    "OpenAIProvider",
    "ProviderOptions",
    "RetryPolicy",
    "TranslationBackend",
    "available_providers",
    "classify_response",
    "create_provider",
    "create_provider_from_config",
    "register_provider",
]
