"""Cache service with stale-while-revalidate semantics.

This service coordinates the cache store (data access) and a caller-supplied
producer (the upstream fetch) so that fresh entries are served directly,
stale entries are served while being refreshed in the background, and
missing or expired entries are fetched before answering.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable

from recipe_search.config import Settings, get_settings
from recipe_search.entities import CacheEntryEntity, CacheResolution, CacheState
from recipe_search.protocols import CacheStore

from .background import BackgroundRefresher

logger = logging.getLogger(__name__)

Producer = Callable[[], Awaitable[str]]


class CacheService:
    """Core cache orchestration service.

    Key lifecycle, with `ttl` the freshness period and `stale_ttl` the
    revalidation window after it:

        MISSING -> FRESH (expires_at > now)
                -> STALE (now - stale_ttl < expires_at <= now)
                -> EXPIRED (expires_at <= now - stale_ttl)

    Concurrent fetches of one key are coalesced: every caller that needs a
    value while a fetch for that key is running awaits the same task, and a
    stale hit schedules nothing if a fetch is already running.

    Example:
        ```python
        cache = CacheService.create(repository=InMemoryCacheRepository.create())

        async def fetch() -> str:
            return await upstream.generate("vegan pasta")

        resolution = await cache.resolve("vegan pasta", fetch)
        ```
    """

    def __init__(
        self,
        repository: CacheStore,
        ttl: float | None = None,
        stale_ttl: float | None = None,
        refresher: BackgroundRefresher | None = None,
        clock: Callable[[], float] | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the cache service.

        Args:
            repository: Cache storage backend (required).
            ttl: Seconds an entry stays fresh. Defaults to settings.
            stale_ttl: Seconds after expiry an entry may still be served stale. Defaults to settings.
            refresher: Background task tracker. Defaults to one sized from settings.
            clock: Time source returning Unix seconds. Defaults to time.time.
            settings: Application settings. Defaults to the cached settings.
        """
        settings = settings or get_settings()
        self._repository = repository
        self._ttl = ttl or settings.cache_ttl
        self._stale_ttl = settings.cache_stale_ttl if stale_ttl is None else stale_ttl
        self._refresher = refresher or BackgroundRefresher(settings.revalidation_max_pending)
        self._clock = clock or time.time
        self._inflight: dict[str, asyncio.Task] = {}

    @classmethod
    def create(
        cls,
        repository: CacheStore,
        ttl: float | None = None,
        stale_ttl: float | None = None,
        clock: Callable[[], float] | None = None,
        settings: Settings | None = None,
    ) -> "CacheService":
        """Factory method to create CacheService with sensible defaults.

        Args:
            repository: Cache storage backend (required).
            ttl: Freshness in seconds. If None, uses settings.
            stale_ttl: Revalidation window in seconds. If None, uses settings.
            clock: Optional time source.
            settings: Optional settings override.

        Returns:
            Configured CacheService instance
        """
        return cls(
            repository=repository,
            ttl=ttl,
            stale_ttl=stale_ttl,
            clock=clock,
            settings=settings,
        )

    def state_of(self, entry: CacheEntryEntity | None, now: float) -> CacheState:
        """Classify an entry's freshness at a point in time."""
        if entry is None:
            return CacheState.MISSING
        if entry.expires_at > now:
            return CacheState.FRESH
        if entry.expires_at > now - self._stale_ttl:
            return CacheState.STALE
        return CacheState.EXPIRED

    async def resolve(self, key: str, producer: Producer) -> CacheResolution:
        """Resolve a key, fetching or revalidating through the producer as needed.

        Business logic:
        1. FRESH: return the cached payload
        2. STALE: return the cached payload and schedule a background refresh
        3. MISSING / EXPIRED: await the producer, store and return its value

        Args:
            key: The normalized cache key
            producer: Async callable returning a fresh payload

        Returns:
            CacheResolution with the payload and how it was obtained

        Raises:
            Whatever the producer raises on a MISSING or EXPIRED lookup.
        """
        entry = self._repository.get(key)
        state = self.state_of(entry, self._clock())

        if state is CacheState.FRESH:
            logger.debug("Cache hit for %r", key)
            return CacheResolution(value=entry.payload, served_from_cache=True, state=state)

        if state is CacheState.STALE:
            logger.info("Serving stale entry for %r, revalidating", key)
            self.schedule_refresh(key, producer)
            return CacheResolution(value=entry.payload, served_from_cache=True, state=state)

        logger.info("Cache miss for %r (%s)", key, state.value)
        task = self._inflight.get(key) or self._spawn(key, producer)
        value = await asyncio.shield(task)
        return CacheResolution(value=value, served_from_cache=False, state=state)

    def schedule_refresh(self, key: str, producer: Producer) -> bool:
        """Refresh a key in the background unless a fetch is already running.

        Returns:
            True if a new refresh was started
        """
        if key in self._inflight:
            return False
        return self._refresher.submit(lambda: self._spawn(key, producer), label=key)

    def _spawn(self, key: str, producer: Producer) -> asyncio.Task:
        task = asyncio.create_task(self._produce_and_store(key, producer))
        self._inflight[key] = task
        task.add_done_callback(lambda t: self._release(key, t))
        return task

    def _release(self, key: str, task: asyncio.Task) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]
        # Mark the exception as retrieved; callers awaiting the task still see it.
        if not task.cancelled():
            task.exception()

    async def _produce_and_store(self, key: str, producer: Producer) -> str:
        value = await producer()
        self.store(key, value)
        return value

    def store(self, key: str, value: str) -> CacheEntryEntity:
        """Write a payload under a key with a fresh expiry.

        Also sweeps entries that are past their revalidation window.
        """
        now = self._clock()
        entry = CacheEntryEntity(payload=value, expires_at=now + self._ttl, stored_at=now)
        self._repository.set(key, entry)
        swept = self._repository.evict_expired(now - self._stale_ttl)
        if swept:
            logger.debug("Swept %d expired cache entries", swept)
        return entry

    def get_entry(self, key: str) -> CacheEntryEntity | None:
        """Read the raw entry for a key (no freshness handling)."""
        return self._repository.get(key)

    def clear(self) -> int:
        """Clear all cache entries.

        Returns:
            Number of entries deleted
        """
        return self._repository.clear_all()

    def get_stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with cache statistics
        """
        return {
            "total_entries": self._repository.count_all(),
            "ttl": self._ttl,
            "stale_ttl": self._stale_ttl,
            "inflight_fetches": len(self._inflight),
            "pending_refreshes": self._refresher.pending,
            "failed_refreshes": self._refresher.failures,
        }

    async def wait_for_refreshes(self) -> None:
        """Wait for all background refreshes to finish."""
        await self._refresher.join()

    async def shutdown(self, timeout: float = 5.0) -> None:
        """Stop background refreshes, cancelling any still running after `timeout`."""
        await self._refresher.shutdown(timeout)

    @property
    def repository(self) -> CacheStore:
        """Get the underlying repository (for testing)."""
        return self._repository
