from collections.abc import Callable
from typing import Any

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from recipe_search.api.dependencies import (
    ClientIdentityDep,
    ImageHandlerDep,
    SearchHandlerDep,
    build_lifespan,
)
from recipe_search.config import Settings, get_settings
from recipe_search.dto import (
    ErrorResponse,
    HealthCheckResponse,
    ImageGenerationRequest,
    ImageGenerationResponse,
    SearchRequest,
    SearchResponse,
    StatsResponse,
)
from recipe_search.errors import RecipeSearchError
from recipe_search.protocols import ImageGenerator, RecipeGenerator

API_VERSION = "0.1.0"
API_DESCRIPTION = "Recipe search gateway with rate limiting and stale-while-revalidate caching"

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


async def recipe_search_error_handler(request: Request, exc: RecipeSearchError) -> JSONResponse:
    """Render any gateway error as `{"error": message}` with its status and headers."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.public_message).model_dump(),
        headers=exc.headers,
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render unparseable request bodies as 400 instead of FastAPI's default 422."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(error="Invalid request body").model_dump(),
    )


def create_app(
    settings: Settings | None = None,
    recipe_generator: RecipeGenerator | None = None,
    image_generator: ImageGenerator | None = None,
    clock: Callable[[], float] | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Application settings. If None, uses the cached settings.
        recipe_generator: Optional recipe generator (defaults to DeepSeek).
        image_generator: Optional image generator (defaults to getimg.ai).
        clock: Optional time source shared by the rate limiters and the cache.

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Recipe Search API",
        description=API_DESCRIPTION,
        version=API_VERSION,
        lifespan=build_lifespan(
            settings,
            recipe_generator=recipe_generator,
            image_generator=image_generator,
            clock=clock,
        ),
    )

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    app.add_exception_handler(RecipeSearchError, recipe_search_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)  # type: ignore[arg-type]

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": "Recipe Search API",
            "version": API_VERSION,
            "description": API_DESCRIPTION,
            "endpoints": {
                "search": "/api/search",
                "image_generation": "/api/image-generation",
                "stats": "/stats",
                "health": "/health",
                "docs": "/docs",
            },
        }

    @app.get("/health", response_model=HealthCheckResponse)
    async def health(handler: SearchHandlerDep) -> HealthCheckResponse:
        """Health check endpoint."""
        return await handler.health_check()

    @app.get("/stats", response_model=StatsResponse)
    async def get_stats(handler: SearchHandlerDep) -> StatsResponse:
        """Get cache, search and rate limit statistics."""
        return await handler.get_stats()

    @app.post("/api/search", response_model=SearchResponse, responses=ERROR_RESPONSES)
    async def search(
        request: SearchRequest,
        response: Response,
        handler: SearchHandlerDep,
        identity: ClientIdentityDep,
    ) -> SearchResponse:
        """
        Search for recipes.

        Args:
            request: Search request with query and optional dietary filters.

        Returns:
            Search response with a JSON string of recipes.
        """
        return await handler.search(request, identity, response)

    @app.post(
        "/api/image-generation",
        response_model=ImageGenerationResponse,
        responses=ERROR_RESPONSES,
    )
    async def generate_image(
        request: ImageGenerationRequest,
        handler: ImageHandlerDep,
    ) -> ImageGenerationResponse:
        """Generate an image for a recipe description."""
        return await handler.generate(request)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "recipe_search.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
