"""Search outcome domain entity."""

from dataclasses import dataclass, field

from .cache_resolution import CacheState
from .rate_limit import RateLimitDecision


@dataclass(frozen=True)
class SearchOutcome:
    """Everything the HTTP layer needs to answer one search.

    Attributes:
        result: Serialized recipe batch (JSON array string)
        cache_status: "HIT" when served from cache, "MISS" otherwise
        cache_state: Freshness of the key at lookup time
        rate_limit: The admission decision for this request
        timings: Phase durations in milliseconds
    """

    result: str
    cache_status: str
    cache_state: CacheState
    rate_limit: RateLimitDecision
    timings: dict[str, int] = field(default_factory=dict)
