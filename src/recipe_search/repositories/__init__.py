"""Repository layer for data access.

This layer abstracts process-local state and outbound HTTP services
behind protocol-based interfaces. This enables:
- Injecting stores with controllable clocks in tests
- Replacing upstream generators with fakes
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from recipe_search.protocols import CacheStore, ImageGenerator, RateStore, RecipeGenerator

from .deepseek_client import DeepSeekClient
from .getimg_client import GetImgClient
from .memory_cache_repository import InMemoryCacheRepository
from .memory_rate_repository import InMemoryRateRepository

__all__ = [
    "CacheStore",
    "RateStore",
    "RecipeGenerator",
    "ImageGenerator",
    "DeepSeekClient",
    "GetImgClient",
    "InMemoryCacheRepository",
    "InMemoryRateRepository",
]
