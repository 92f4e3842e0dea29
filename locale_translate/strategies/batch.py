"""Chunked translation strategy."""

from typing import TypeVar

from locale_translate.errors import TranslationError
from locale_translate.observability.progress import ProgressReporter
from locale_translate.providers.protocols import TranslationBackend
from locale_translate.strategies.base import BaseStrategy, StrategyKind, percent


DEFAULT_BATCH_SIZE = 10

T = TypeVar("T")


class BatchStrategy(BaseStrategy):
    """Translates strings in fixed-size chunks, one request per chunk.

    Outputs are mapped back onto keys by position within each chunk.
    """

    kind = StrategyKind.BATCH

    def __init__(
        self,
        provider: TranslationBackend,
        progress: ProgressReporter | None = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        """Initialize the strategy.

        Args:
            provider: Translation backend.
            progress: Optional receiver for progress updates.
            batch_size: Maximum strings per backend call.
        """
        super().__init__(provider, progress)
        if batch_size <= 0:
            msg = f"Batch size must be positive, got {batch_size}"
            raise ValueError(msg)
        self.batch_size = batch_size

    def translate(
        self,
        strings: dict[str, str],
        target_lang_code: str,
        target_lang_name: str,
    ) -> dict[str, str]:
        """Translate strings chunk by chunk.

        Args:
            strings: Dot-key to source text.
            target_lang_code: Target language code.
            target_lang_name: Target language display name.

        Returns:
            Dot-key to translated text.

        Raises:
            TranslationError: If a chunk comes back with the wrong length.
        """
        translated: dict[str, str] = {}
        items = list(strings.items())
        batches = create_batches(items, self.batch_size)
        total_batches = len(batches)

        for batch_index, batch in enumerate(batches):
            self._report(
                target_lang_name,
                f"Batch {batch_index + 1}/{total_batches}",
                percent(batch_index + 1, total_batches),
            )

            keys = [key for key, _ in batch]
            texts = [text for _, text in batch]
            outputs = self.provider.translate_batch(
                texts, target_lang_code, target_lang_name
            )
            if len(outputs) != len(texts):
                msg = (
                    f"Batch {batch_index + 1} returned {len(outputs)} translations "
                    f"for {len(texts)} strings"
                )
                raise TranslationError(
                    msg,
                    {
                        "target_language": target_lang_code,
                        "batch": batch_index + 1,
                        "keys": keys,
                    },
                )

            translated.update(zip(keys, outputs, strict=True))

            self._log.debug(
                "translation_batch_complete",
                language=target_lang_code,
                batch=batch_index + 1,
                total_batches=total_batches,
                batch_size=len(batch),
            )

        return translated


def create_batches(items: list[T], batch_size: int) -> list[list[T]]:
    """Split items into fixed-size batches.

    Args:
        items: Items to batch.
        batch_size: Maximum items per batch.

    Returns:
        List of item batches.
    """
    return [items[i : i + batch_size] for i in range(0, len(items), batch_size)]
