"""In-memory implementation of CacheStore.

Entries live in a process-local dictionary until they are evicted or the
process restarts. There is no durability across restarts.
"""

import threading

from recipe_search.entities import CacheEntryEntity


class InMemoryCacheRepository:
    """Dictionary-backed cache store.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.

    Every operation holds a lock so entries are never observed half written,
    even when the store is shared with worker threads.
    """

    def __init__(self) -> None:
        """Initialize an empty cache store."""
        self._entries: dict[str, CacheEntryEntity] = {}
        self._lock = threading.Lock()

    @classmethod
    def create(cls) -> "InMemoryCacheRepository":
        """Factory method to create InMemoryCacheRepository.

        Returns:
            Empty InMemoryCacheRepository
        """
        return cls()

    def get(self, key: str) -> CacheEntryEntity | None:
        with self._lock:
            return self._entries.get(key)

    def set(self, key: str, entry: CacheEntryEntity) -> None:
        with self._lock:
            self._entries[key] = entry

    def evict(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def evict_expired(self, before: float) -> int:
        """Remove entries whose expiry is at or before a timestamp.

        Args:
            before: Unix timestamp cut-off

        Returns:
            Number of entries removed
        """
        with self._lock:
            expired = [key for key, entry in self._entries.items() if entry.expires_at <= before]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def count_all(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear_all(self) -> int:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        return count
