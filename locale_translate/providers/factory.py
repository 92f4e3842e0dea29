"""Registry-backed factory for translation providers."""

import threading
from typing import TYPE_CHECKING, Any

import structlog

from locale_translate.errors import ProviderNotFoundError
from locale_translate.providers.anthropic_provider import AnthropicProvider
from locale_translate.providers.base import BaseHttpProvider, ProviderOptions
from locale_translate.providers.gemini_provider import GeminiProvider
from locale_translate.providers.openai_provider import OpenAIProvider


if TYPE_CHECKING:
    from locale_translate.config.schema import TranslationConfig

logger = structlog.get_logger()

_registry: dict[str, type[BaseHttpProvider]] = {
    OpenAIProvider.name: OpenAIProvider,
    GeminiProvider.name: GeminiProvider,
    AnthropicProvider.name: AnthropicProvider,
}
_aliases: dict[str, str] = {
    "chatgpt": OpenAIProvider.name,
    "claude": AnthropicProvider.name,
}
_registry_lock = threading.Lock()


def resolve_provider_name(name: str) -> str:
    """Map a provider identifier or alias to its canonical name.

    Args:
        name: Provider identifier, case-insensitive.

    Returns:
        Canonical provider name.

    Raises:
        ProviderNotFoundError: If no provider is registered under the name.
    """
    key = name.strip().lower()
    key = _aliases.get(key, key)
    with _registry_lock:
        if key not in _registry:
            msg = (
                f"Unknown provider: {name}. "
                f"Supported: {', '.join(available_providers())}"
            )
            raise ProviderNotFoundError(
                msg, {"provider": name, "available": available_providers()}
            )
    return key


def available_providers() -> list[str]:
    """List canonical names of all registered providers."""
    return sorted(_registry)


def register_provider(
    name: str,
    provider_class: type[BaseHttpProvider],
    aliases: list[str] | None = None,
) -> None:
    """Register a provider class under a name.

    Args:
        name: Canonical provider identifier.
        provider_class: BaseHttpProvider subclass to instantiate.
        aliases: Additional identifiers resolving to the same provider.
    """
    key = name.strip().lower()
    with _registry_lock:
        _registry[key] = provider_class
        for alias in aliases or []:
            _aliases[alias.strip().lower()] = key
    logger.debug("provider_registered", component="provider", provider=key)


def unregister_provider(name: str) -> None:
    """Remove a provider and its aliases (primarily for testing)."""
    key = name.strip().lower()
    with _registry_lock:
        _registry.pop(key, None)
        for alias in [a for a, target in _aliases.items() if target == key]:
            del _aliases[alias]


def create_provider(
    name: str,
    options: ProviderOptions,
    **kwargs: Any,
) -> BaseHttpProvider:
    """Create a provider instance.

    Args:
        name: Provider identifier or alias.
        options: Provider settings.
        **kwargs: Collaborators forwarded to the provider (cache,
            rate_limiter, http_client, sleep, rng).

    Returns:
        A provider ready for use.

    Raises:
        ProviderNotFoundError: If the provider is unknown.
    """
    key = resolve_provider_name(name)
    with _registry_lock:
        provider_class = _registry[key]
    provider = provider_class(options, **kwargs)
    logger.info(
        "provider_created",
        component="provider",
        provider=key,
        model=provider.model,
    )
    return provider


def provider_options_from_config(config: "TranslationConfig") -> ProviderOptions:
    """Build provider settings from a validated configuration.

    Args:
        config: Translation configuration.

    Returns:
        ProviderOptions for the configured provider.
    """
    return ProviderOptions(
        api_key=config.api_key_for_provider() or "",
        source_language=config.source_language,
        model=config.model,
        translation_context=config.translation_context,
        preserve_variables=config.preserve_variables,
        cache_enabled=config.cache_enabled,
        cache_size=config.cache_size,
        cache_ttl=config.cache_ttl,
        rate_limit_delay=config.rate_limit_delay,
        max_retries=config.max_retries,
        retry_delay=config.retry_delay,
        request_timeout=config.request_timeout,
        connect_timeout=config.connect_timeout,
    )


def create_provider_from_config(
    config: "TranslationConfig", **kwargs: Any
) -> BaseHttpProvider:
    """Create the provider selected by a configuration.

    Args:
        config: Translation configuration.
        **kwargs: Collaborators forwarded to the provider.

    Returns:
        A provider ready for use.
    """
    options = provider_options_from_config(config)
    return create_provider(config.provider, options, **kwargs)
