"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from recipe_search.services import CacheService, RateLimitService, SearchService

    cache = CacheService.create(repository=InMemoryCacheRepository.create())
    limiter = RateLimitService(store=InMemoryRateRepository.create(500, 60))
    search = SearchService(rate_limiter=limiter, cache=cache, generator=DeepSeekClient.create())
    ```
"""

from .background import BackgroundRefresher
from .cache_service import CacheService
from .image_service import ImageService
from .rate_limit_service import FixedWindowLimiter, RateLimitService
from .recipe_parser import ParseErr, ParseOk, parse_recipes, serialize_recipes, try_parse_recipes
from .search_service import SearchService

__all__ = [
    "BackgroundRefresher",
    "CacheService",
    "FixedWindowLimiter",
    "ImageService",
    "ParseErr",
    "ParseOk",
    "RateLimitService",
    "SearchService",
    "parse_recipes",
    "serialize_recipes",
    "try_parse_recipes",
]
