"""Protocol interface for translation backends."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class TranslationBackend(Protocol):
    """Protocol for translation backends.

    Any backend implementing ``translate_text`` and ``translate_batch``
    with the matching signatures can be used interchangeably by the
    strategies, regardless of vendor or transport.
    """

    def translate_text(
        self, text: str, target_lang_code: str, target_lang_name: str
    ) -> str:
        """Translate a single string.

        Args:
            text: Source text.
            target_lang_code: Target language code (e.g. "it").
            target_lang_name: Target language display name (e.g. "Italian").

        Returns:
            Translated text.

        Raises:
            ValidationError: If text or language code is malformed.
            TranslationError: If the backend call fails terminally.
        """
        ...

    def translate_batch(
        self, texts: list[str], target_lang_code: str, target_lang_name: str
    ) -> list[str]:
        """Translate several strings, preserving order.

        Args:
            texts: Source texts.
            target_lang_code: Target language code.
            target_lang_name: Target language display name.

        Returns:
            Translations with the same length and order as ``texts``.

        Raises:
            ValidationError: If any text or the language code is malformed.
            TranslationError: If the backend call fails terminally.
        """
        ...
