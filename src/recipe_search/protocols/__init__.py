"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Injecting in-memory stores with controllable clocks
- Unit testing with fake upstream generators
- Clear separation of concerns
"""

from .cache_store import CacheStore
from .generators import ImageGenerator, RecipeGenerator
from .rate_store import RateStore

__all__ = [
    "CacheStore",
    "ImageGenerator",
    "RateStore",
    "RecipeGenerator",
]
