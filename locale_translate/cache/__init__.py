"""In-memory translation cache."""

from locale_translate.cache.lru import CacheEntry, TranslationCache


__all__ = ["CacheEntry", "TranslationCache"]
