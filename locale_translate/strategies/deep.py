"""Per-item translation strategy."""

from locale_translate.strategies.base import BaseStrategy, StrategyKind, percent


class DeepStrategy(BaseStrategy):
    """Translates strings one at a time.

    Used for small inputs where per-key progress is worth the extra
    requests.
    """

    kind = StrategyKind.DEEP

    def translate(
        self,
        strings: dict[str, str],
        target_lang_code: str,
        target_lang_name: str,
    ) -> dict[str, str]:
        """Translate each string individually.

        Args:
            strings: Dot-key to source text.
            target_lang_code: Target language code.
            target_lang_name: Target language display name.

        Returns:
            Dot-key to translated text.
        """
        translated: dict[str, str] = {}
        total = len(strings)

        for index, (key, text) in enumerate(strings.items()):
            self._report(target_lang_name, key, percent(index + 1, total))
            translated[key] = self.provider.translate_text(
                text, target_lang_code, target_lang_name
            )

        self._log.debug(
            "deep_translation_complete",
            language=target_lang_code,
            translated=len(translated),
        )
        return translated
