"""Rate window storage protocol.

Defines the interface for the per-client store used by the rate limiter.
Stores are expected to bound their own size and forget idle clients.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class RateStore(Protocol):
    """Protocol for per-client request timestamp storage."""

    def get(self, identity: str) -> list[float] | None:
        """Return the tracked timestamps for a client, or None if untracked."""
        ...

    def set(self, identity: str, timestamps: list[float]) -> None:
        """Replace the tracked timestamps for a client and mark it recently used."""
        ...

    def evict(self, identity: str) -> bool:
        """Forget a client. Returns True if it was tracked."""
        ...

    def count_all(self) -> int:
        """Number of clients currently tracked."""
        ...
