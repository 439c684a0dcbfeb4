"""In-memory implementation of RateStore.

Tracks request timestamps per client in an LRU-ordered dictionary with a
bounded number of clients. Clients idle for longer than the idle TTL are
forgotten on access, and the least recently touched client is reclaimed
when the store is full.

Under heavy client churn this can reset a legitimate client's quota early.
It never grants a client more than the quota inside one window.
"""

import threading
import time
from collections import OrderedDict
from collections.abc import Callable


class InMemoryRateRepository:
    """Bounded LRU store of per-client timestamps.

    This class satisfies the RateStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(
        self,
        max_clients: int = 500,
        idle_ttl: float = 60.0,
        clock: Callable[[], float] | None = None,
    ) -> None:
        """Initialize the rate store.

        Args:
            max_clients: Maximum number of distinct clients tracked.
            idle_ttl: Seconds after the last touch before a client is forgotten.
            clock: Time source returning Unix seconds. Defaults to time.time.
        """
        if max_clients < 1:
            raise ValueError("max_clients must be at least 1")
        self._max_clients = max_clients
        self._idle_ttl = idle_ttl
        self._clock = clock or time.time
        # identity -> (last_touched, timestamps)
        self._entries: OrderedDict[str, tuple[float, list[float]]] = OrderedDict()
        self._lock = threading.Lock()

    @classmethod
    def create(
        cls,
        max_clients: int,
        idle_ttl: float,
        clock: Callable[[], float] | None = None,
    ) -> "InMemoryRateRepository":
        """Factory method to create InMemoryRateRepository.

        Args:
            max_clients: Maximum number of distinct clients tracked.
            idle_ttl: Seconds of inactivity before a client is forgotten.
            clock: Optional time source.

        Returns:
            Configured InMemoryRateRepository
        """
        return cls(max_clients=max_clients, idle_ttl=idle_ttl, clock=clock)

    def get(self, identity: str) -> list[float] | None:
        now = self._clock()
        with self._lock:
            item = self._entries.get(identity)
            if item is None:
                return None
            touched_at, timestamps = item
            if now - touched_at > self._idle_ttl:
                del self._entries[identity]
                return None
            self._entries.move_to_end(identity)
            return list(timestamps)

    def set(self, identity: str, timestamps: list[float]) -> None:
        now = self._clock()
        with self._lock:
            self._entries[identity] = (now, list(timestamps))
            self._entries.move_to_end(identity)
            while len(self._entries) > self._max_clients:
                self._entries.popitem(last=False)

    def evict(self, identity: str) -> bool:
        with self._lock:
            return self._entries.pop(identity, None) is not None

    def count_all(self) -> int:
        with self._lock:
            return len(self._entries)
