"""One-off translation of strings without locale files."""

import structlog

from locale_translate.config.schema import TranslationConfig
from locale_translate.errors import (
    ConfigurationError,
    LocaleTranslateError,
    TranslationError,
    ValidationError,
)
from locale_translate.providers.factory import create_provider_from_config
from locale_translate.providers.protocols import TranslationBackend
from locale_translate.providers.validation import validate_language_code, validate_text


logger = structlog.get_logger()


class DirectTranslator:
    """Translates individual strings through the configured backend.

    Example:
        >>> with DirectTranslator(config) as translator:
        ...     translator.translate("Hello", to="it", language_name="Italian")
        'Ciao'
    """

    def __init__(
        self,
        config: TranslationConfig,
        provider: TranslationBackend | None = None,
    ) -> None:
        """Initialize the translator.

        Args:
            config: Configuration naming the provider and its API key.
            provider: Backend to use instead of the configured one.

        Raises:
            ConfigurationError: If the provider is unknown or has no API key.
        """
        self.config = config
        self._owns_provider = False
        if provider is None:
            if not config.api_key_for_provider():
                msg = f"API key is required for provider {config.provider!r}"
                raise ConfigurationError(msg, {"provider": config.provider})
            provider = create_provider_from_config(config)
            self._owns_provider = True
        self._provider = provider
        self._log = logger.bind(component="direct_translator")

    def close(self) -> None:
        """Close the backend if this translator created it."""
        if self._owns_provider:
            close = getattr(self._provider, "close", None)
            if callable(close):
                close()
            self._owns_provider = False

    def __enter__(self) -> "DirectTranslator":
        """Enter context manager."""
        return self

    def __exit__(self, *args: object) -> None:
        """Exit context manager and close the backend."""
        self.close()

    def translate(self, text: str, *, to: str, language_name: str) -> str:
        """Translate a single string.

        Args:
            text: Source text.
            to: Target language code.
            language_name: Target language display name.

        Returns:
            Translated text.

        Raises:
            ValidationError: If the text or language code is invalid.
            TranslationError: If the backend call fails.
        """
        validate_text(text)
        validate_language_code(to)
        try:
            return self._provider.translate_text(text, to, language_name)
        except (ValidationError, TranslationError):
            raise
        except LocaleTranslateError as e:
            raise _wrap(e, text, to) from e

    def translate_batch(
        self,
        texts: list[str],
        *,
        to: str,
        language_name: str,
        skip_errors: bool = False,
    ) -> list[str | None]:
        """Translate several strings one by one.

        Args:
            texts: Source texts.
            to: Target language code.
            language_name: Target language display name.
            skip_errors: Yield None for failed strings instead of raising.

        Returns:
            Translations in input order.

        Raises:
            ValidationError: If any text or the language code is invalid.
            TranslationError: If a backend call fails and skip_errors is off.
        """
        if not texts:
            return []
        for text in texts:
            validate_text(text)
        validate_language_code(to)

        results: list[str | None] = []
        for text in texts:
            try:
                results.append(self._provider.translate_text(text, to, language_name))
            except LocaleTranslateError as e:
                if not skip_errors:
                    if isinstance(e, TranslationError):
                        raise
                    raise _wrap(e, text, to) from e
                self._log.warning(
                    "direct_translation_skipped",
                    target_language=to,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                results.append(None)
        return results


def _wrap(error: LocaleTranslateError, text: str, target: str) -> TranslationError:
    return TranslationError(
        f"Failed to translate text: {error}",
        {"text": text, "target_language": target, "original_error": error},
    )
