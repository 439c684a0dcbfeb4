"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .cache_entry import CacheEntryEntity
from .cache_resolution import CacheResolution, CacheState
from .rate_limit import RateLimitDecision
from .recipe import RecipeEntity
from .search_outcome import SearchOutcome

__all__ = [
    "CacheEntryEntity",
    "CacheResolution",
    "CacheState",
    "RateLimitDecision",
    "RecipeEntity",
    "SearchOutcome",
]
