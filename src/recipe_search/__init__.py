"""Recipe Search - rate-limited, cached gateway to an LLM recipe generator.

This package provides a layered architecture:

Layers:
    - protocols: Interface contracts (CacheStore, RateStore, RecipeGenerator, ImageGenerator)
    - repositories: In-memory stores and upstream HTTP clients
    - services: Business logic (rate limiting, caching, parsing, orchestration)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from recipe_search.repositories import DeepSeekClient, InMemoryCacheRepository, InMemoryRateRepository
    from recipe_search.services import CacheService, RateLimitService, SearchService

    search = SearchService(
        rate_limiter=RateLimitService(store=InMemoryRateRepository.create(500, 60)),
        cache=CacheService.create(repository=InMemoryCacheRepository.create()),
        generator=DeepSeekClient.create(),
    )
    ```

For HTTP API:
    ```python
    from recipe_search.api.app import app
    ```
"""

from recipe_search.config import settings
from recipe_search.dto import ImageGenerationRequest, SearchRequest
from recipe_search.entities import CacheEntryEntity, RateLimitDecision, RecipeEntity
from recipe_search.errors import RecipeSearchError
from recipe_search.handlers import ImageHandler, SearchHandler
from recipe_search.protocols import CacheStore, ImageGenerator, RateStore, RecipeGenerator
from recipe_search.repositories import (
    DeepSeekClient,
    GetImgClient,
    InMemoryCacheRepository,
    InMemoryRateRepository,
)
from recipe_search.services import CacheService, ImageService, RateLimitService, SearchService

__all__ = [
    # Configuration
    "settings",
    # Protocols (interfaces)
    "CacheStore",
    "RateStore",
    "RecipeGenerator",
    "ImageGenerator",
    # Services (business logic)
    "CacheService",
    "RateLimitService",
    "SearchService",
    "ImageService",
    # Handlers (HTTP)
    "SearchHandler",
    "ImageHandler",
    # Repositories (data access)
    "InMemoryCacheRepository",
    "InMemoryRateRepository",
    "DeepSeekClient",
    "GetImgClient",
    # Entities (domain models)
    "CacheEntryEntity",
    "RateLimitDecision",
    "RecipeEntity",
    # Errors
    "RecipeSearchError",
    # DTOs (API contracts)
    "SearchRequest",
    "ImageGenerationRequest",
]
