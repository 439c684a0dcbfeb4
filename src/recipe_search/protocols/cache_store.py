"""Cache storage protocol.

Defines the interface for any key/value backend that can hold cached
search payloads for the stale-while-revalidate cache.

Implementations can include:
- Process-local dictionary (default)
- Test doubles with inspectable state
"""

from typing import Protocol, runtime_checkable

from recipe_search.entities import CacheEntryEntity


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for cache storage backends.

    Any type that implements these methods satisfies the protocol,
    no explicit inheritance needed.

    Example:
        ```python
        from recipe_search.protocols import CacheStore

        store: CacheStore = InMemoryCacheRepository()
        ```
    """

    def get(self, key: str) -> CacheEntryEntity | None:
        """Fetch the entry stored under a key.

        Args:
            key: The normalized cache key

        Returns:
            The entry, or None if nothing is stored
        """
        ...

    def set(self, key: str, entry: CacheEntryEntity) -> None:
        """Store an entry, replacing any previous one.

        Args:
            key: The normalized cache key
            entry: The entry to store
        """
        ...

    def evict(self, key: str) -> bool:
        """Remove the entry stored under a key.

        Args:
            key: The normalized cache key

        Returns:
            True if an entry was removed, False otherwise
        """
        ...

    def evict_expired(self, before: float) -> int:
        """Remove every entry whose expiry is at or before a timestamp.

        Args:
            before: Unix timestamp cut-off

        Returns:
            Number of entries removed
        """
        ...

    def count_all(self) -> int:
        """Count stored entries."""
        ...

    def clear_all(self) -> int:
        """Remove all entries.

        Returns:
            Number of entries removed
        """
        ...
