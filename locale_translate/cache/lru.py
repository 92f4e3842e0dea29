"""Thread-safe LRU cache for translated strings."""

import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass, field

import structlog


logger = structlog.get_logger()

DEFAULT_CAPACITY = 1000

CacheKey = tuple[str, str]


@dataclass(frozen=True)
class CacheEntry:
    """A cached translation.

    Attributes:
        key: Composite of source text and target language code.
        value: Translated text.
        created_at: Clock reading when the entry was stored.
    """

    key: CacheKey
    value: str
    created_at: float


@dataclass
class TranslationCache:
    """Least-recently-used cache keyed by (source text, language code).

    Both read hits and writes move an entry to the most-recent end.
    Entries older than ``ttl`` seconds read as absent and are purged on
    access. Thread-safe for concurrent language jobs.

    Attributes:
        capacity: Maximum number of entries.
        ttl: Time to live in seconds, or None for no expiry.
    """

    capacity: int = DEFAULT_CAPACITY
    ttl: float | None = None
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)

    _entries: OrderedDict[CacheKey, CacheEntry] = field(
        init=False, default_factory=OrderedDict, repr=False
    )
    _lock: threading.Lock = field(
        init=False, default_factory=threading.Lock, repr=False
    )
    _hits: int = field(init=False, default=0)
    _misses: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        """Validate cache bounds."""
        if self.capacity <= 0:
            msg = f"Cache capacity must be positive, got {self.capacity}"
            raise ValueError(msg)
        if self.ttl is not None and self.ttl <= 0:
            msg = f"Cache TTL must be positive, got {self.ttl}"
            raise ValueError(msg)

    def get(self, text: str, language_code: str) -> str | None:
        """Look up a cached translation.

        Args:
            text: Source text.
            language_code: Target language code.

        Returns:
            Cached translation, or None if absent or expired.
        """
        key = (text, language_code)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None

            if self._is_expired(entry):
                del self._entries[key]
                self._misses += 1
                return None

            self._entries.move_to_end(key)
            self._hits += 1
            return entry.value

    def set(self, text: str, language_code: str, value: str) -> str:
        """Store a translation, evicting the least recently used entry if full.

        Args:
            text: Source text.
            language_code: Target language code.
            value: Translated text.

        Returns:
            The stored value.
        """
        key = (text, language_code)
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
            elif len(self._entries) >= self.capacity:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(
                    "cache_evicted",
                    component="cache",
                    language=evicted[1],
                    size=len(self._entries),
                )
            self._entries[key] = CacheEntry(
                key=key, value=value, created_at=self.clock()
            )
        return value

    def contains(self, text: str, language_code: str) -> bool:
        """Check whether a live entry exists (refreshes recency on hit)."""
        return self.get(text, language_code) is not None

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._entries.clear()

    @property
    def size(self) -> int:
        """Get the number of stored entries, expired ones included."""
        with self._lock:
            return len(self._entries)

    @property
    def hits(self) -> int:
        """Get the number of lookup hits since creation."""
        with self._lock:
            return self._hits

    @property
    def misses(self) -> int:
        """Get the number of lookup misses since creation."""
        with self._lock:
            return self._misses

    def keys(self) -> list[CacheKey]:
        """Get keys from least to most recently used."""
        with self._lock:
            return list(self._entries)

    def _is_expired(self, entry: CacheEntry) -> bool:
        """Check TTL expiry. Must be called while holding the lock."""
        if self.ttl is None:
            return False
        return self.clock() - entry.created_at >= self.ttl
