"""HTTP handlers for search operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like response headers. Errors from the service
layer are RecipeSearchError subclasses and are rendered by the exception
handler registered on the app.
"""

from fastapi import Response

from recipe_search.config import Settings
from recipe_search.dto import HealthCheckResponse, SearchRequest, SearchResponse, StatsResponse
from recipe_search.entities import SearchOutcome
from recipe_search.services import SearchService


class SearchHandler:
    """HTTP handlers for search operations.

    This handler delegates business logic to SearchService
    and handles HTTP-specific concerns like:
    - Converting outcomes to DTOs
    - Rate limit, cache and timing headers

    Example:
        ```python
        handler = SearchHandler(search_service=search_service, settings=settings)

        @app.post("/api/search", response_model=SearchResponse)
        async def search(request: SearchRequest, http_request: Request, response: Response):
            return await handler.search(request, client_identity(http_request), response)
        ```
    """

    def __init__(self, search_service: SearchService, settings: Settings) -> None:
        """Initialize the search handler.

        Args:
            search_service: The search service for business logic (required).
            settings: Application settings used for health reporting.
        """
        self._search = search_service
        self._settings = settings

    async def search(
        self,
        request: SearchRequest,
        identity: str,
        response: Response,
    ) -> SearchResponse:
        """Handle POST /api/search requests.

        Args:
            request: The search request DTO
            identity: Client identity derived from the request
            response: Outgoing response, used to attach headers

        Returns:
            SearchResponse with the serialized recipes
        """
        outcome = await self._search.search(
            query=request.query,
            identity=identity,
            filters=request.filters,
        )
        response.headers.update(self.outcome_headers(outcome))
        return SearchResponse(result=outcome.result)

    @staticmethod
    def outcome_headers(outcome: SearchOutcome) -> dict[str, str]:
        """Build rate limit, cache and timing headers for a search outcome."""
        headers = outcome.rate_limit.to_headers()
        headers["X-Cache"] = outcome.cache_status
        headers["X-Cache-State"] = outcome.cache_state.value
        for phase, duration_ms in outcome.timings.items():
            headers[f"X-Timing-{phase}"] = str(duration_ms)
        return headers

    async def get_stats(self) -> StatsResponse:
        """Handle GET /stats requests."""
        return StatsResponse(**self._search.get_stats())

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        upstream_configured = self._settings.has_deepseek_credentials
        return HealthCheckResponse(
            status="healthy" if upstream_configured else "degraded",
            upstream_configured=upstream_configured,
            image_configured=bool(self._settings.getimg_api_key),
        )
