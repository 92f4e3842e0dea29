"""Two-tier key exclusion: global and per target language."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from locale_translate.config.schema import TranslationConfig


@dataclass(frozen=True)
class ExclusionSet:
    """Dot-keys that must not be translated.

    Keys match exactly; there is no prefix or pattern matching.

    Attributes:
        global_keys: Keys excluded for every language.
        per_language: Extra keys excluded for a language code.
    """

    global_keys: frozenset[str] = frozenset()
    per_language: Mapping[str, frozenset[str]] = field(default_factory=dict)

    @classmethod
    def from_lists(
        cls,
        global_keys: Iterable[str] = (),
        per_language: Mapping[str, Iterable[str]] | None = None,
    ) -> "ExclusionSet":
        """Build an exclusion set from plain lists."""
        return cls(
            global_keys=frozenset(global_keys),
            per_language={
                code: frozenset(keys) for code, keys in (per_language or {}).items()
            },
        )

    @classmethod
    def from_config(cls, config: "TranslationConfig") -> "ExclusionSet":
        """Build the exclusion set configured for a run."""
        return cls.from_lists(config.global_exclusions, config.exclusions_per_language)

    def keys_for(self, language_code: str) -> frozenset[str]:
        """Get every key excluded for a language."""
        return self.global_keys | self.per_language.get(language_code, frozenset())

    def is_excluded(self, key: str, language_code: str) -> bool:
        """Check whether a key is excluded for a language."""
        return key in self.global_keys or key in self.per_language.get(
            language_code, frozenset()
        )

    def filter(self, strings: Mapping[str, Any], language_code: str) -> dict[str, Any]:
        """Remove excluded keys, preserving order.

        Args:
            strings: Flat dot-key map.
            language_code: Target language code.

        Returns:
            New map without excluded keys; the input is not modified.
        """
        excluded = self.keys_for(language_code)
        return {key: value for key, value in strings.items() if key not in excluded}
