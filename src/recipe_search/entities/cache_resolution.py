"""Cache resolution domain entity."""

from dataclasses import dataclass
from enum import Enum


class CacheState(str, Enum):
    """Freshness of a cache key at lookup time."""

    MISSING = "MISSING"
    FRESH = "FRESH"
    STALE = "STALE"
    EXPIRED = "EXPIRED"


@dataclass(frozen=True)
class CacheResolution:
    """Result of resolving a key through the cache.

    Attributes:
        value: The payload returned to the caller
        served_from_cache: True for FRESH and STALE lookups
        state: The state the key was in when it was looked up
    """

    value: str
    served_from_cache: bool
    state: CacheState
