"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from collections.abc import Callable
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from recipe_search.config import Settings, configure_logging
from recipe_search.handlers import ImageHandler, SearchHandler
from recipe_search.protocols import ImageGenerator, RecipeGenerator
from recipe_search.repositories import (
    DeepSeekClient,
    GetImgClient,
    InMemoryCacheRepository,
    InMemoryRateRepository,
)
from recipe_search.services import (
    CacheService,
    FixedWindowLimiter,
    ImageService,
    RateLimitService,
    SearchService,
)
from recipe_search.utils import client_identity

logger = logging.getLogger(__name__)


def get_search_handler(request: Request) -> SearchHandler:
    """Dependency injection for SearchHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The SearchHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "search_handler", None)
    if handler is None:
        raise RuntimeError("SearchHandler not initialized. Check lifespan setup.")
    return handler


def get_image_handler(request: Request) -> ImageHandler:
    """Dependency injection for ImageHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "image_handler", None)
    if handler is None:
        raise RuntimeError("ImageHandler not initialized. Check lifespan setup.")
    return handler


def get_client_identity(request: Request) -> str:
    """Dependency returning the rate-limit identity of the caller."""
    return client_identity(request)


def build_lifespan(
    settings: Settings,
    recipe_generator: RecipeGenerator | None = None,
    image_generator: ImageGenerator | None = None,
    clock: Callable[[], float] | None = None,
):
    """Build the lifespan context manager for a FastAPI app.

    Generators and the clock can be injected; by default the DeepSeek and
    getimg.ai clients are created from settings and wall-clock time is used.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for FastAPI app.

        Initializes all layers and stores in app.state:
        1. Repositories (process-local stores and upstream clients)
        2. Services (business logic) - stored in app.state.search_service / image_service
        3. Handlers (HTTP endpoints) - stored in app.state.search_handler / image_handler

        Cleanup:
            Stops background refreshes, closes upstream clients and removes
            everything from app.state on shutdown
        """
        configure_logging(settings.log_level)

        owned_clients = []
        generator = recipe_generator
        if generator is None:
            generator = DeepSeekClient.create(settings=settings)
            owned_clients.append(generator)
        images = image_generator
        if images is None:
            images = GetImgClient.create(settings=settings)
            owned_clients.append(images)

        rate_store = InMemoryRateRepository.create(
            max_clients=settings.rate_limit_max_clients,
            idle_ttl=settings.rate_limit_window,
            clock=clock,
        )
        cache_service = CacheService.create(
            repository=InMemoryCacheRepository.create(),
            clock=clock,
            settings=settings,
        )
        search_service = SearchService(
            rate_limiter=RateLimitService(store=rate_store, clock=clock, settings=settings),
            cache=cache_service,
            generator=generator,
        )
        image_service = ImageService(
            generator=images,
            limiter=FixedWindowLimiter(
                limit=settings.image_rate_limit,
                window=settings.image_rate_window,
                clock=clock,
            ),
        )

        # Store in app.state (FastAPI pattern)
        app.state.search_service = search_service
        app.state.image_service = image_service
        app.state.search_handler = SearchHandler(search_service=search_service, settings=settings)
        app.state.image_handler = ImageHandler(image_service=image_service)

        if not settings.has_deepseek_credentials and recipe_generator is None:
            logger.warning("DEEPSEEK_API_KEY is not set; searches will fail until it is configured")
        logger.info(
            "Recipe search initialized (ttl=%ss, stale=%ss, %d requests per %ss)",
            settings.cache_ttl,
            settings.cache_stale_ttl,
            settings.rate_limit_requests,
            settings.rate_limit_window,
        )

        yield

        await cache_service.shutdown()
        for client in owned_clients:
            await client.close()

        del app.state.search_handler
        del app.state.image_handler
        del app.state.search_service
        del app.state.image_service
        logger.info("Recipe search shut down")

    return lifespan


# Type aliases for cleaner dependency injection
SearchHandlerDep = Annotated[SearchHandler, Depends(get_search_handler)]
ImageHandlerDep = Annotated[ImageHandler, Depends(get_image_handler)]
ClientIdentityDep = Annotated[str, Depends(get_client_identity)]
