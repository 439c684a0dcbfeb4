"""Search orchestration service.

Composes admission control, the stale-while-revalidate cache, the upstream
recipe generator and the output parser into the handling of one search.
Every failure from the generator or the parser is caught here, logged and
re-raised as a member of the recipe_search.errors taxonomy.
"""

import logging
from collections.abc import Iterable

from recipe_search.entities import CacheState, SearchOutcome
from recipe_search.errors import (
    ConfigurationError,
    MalformedResponse,
    RateLimited,
    RecipeSearchError,
    SearchFailed,
    UpstreamError,
    ValidationError,
)
from recipe_search.models import SearchMetrics
from recipe_search.protocols import RecipeGenerator
from recipe_search.utils import PhaseTimer, build_cache_key, compose_query

from .cache_service import CacheService
from .rate_limit_service import RateLimitService
from .recipe_parser import ParseErr, serialize_recipes, try_parse_recipes

logger = logging.getLogger(__name__)

# Text the web client shows on failure; seeing it as a query means an error was echoed back
REJECTED_QUERY_MARKERS = ("Failed to fetch search results", "Error:")


class SearchService:
    """End-to-end handling of one recipe search.

    Flow: rate limit -> validate -> cache lookup -> [miss] upstream -> parse
    -> cache write -> respond.

    Example:
        ```python
        service = SearchService(
            rate_limiter=RateLimitService(store=InMemoryRateRepository.create(500, 60)),
            cache=CacheService.create(repository=InMemoryCacheRepository.create()),
            generator=DeepSeekClient.create(),
        )
        outcome = await service.search("vegan pasta", identity="203.0.113.7")
        ```
    """

    def __init__(
        self,
        rate_limiter: RateLimitService,
        cache: CacheService,
        generator: RecipeGenerator,
        metrics: SearchMetrics | None = None,
    ) -> None:
        """Initialize the search service.

        Args:
            rate_limiter: Per-client admission control (required).
            cache: Stale-while-revalidate cache (required).
            generator: Upstream recipe generator (required).
            metrics: Counters shared with the stats endpoint.
        """
        self._rate_limiter = rate_limiter
        self._cache = cache
        self._generator = generator
        self._metrics = metrics or SearchMetrics()

    @staticmethod
    def validate_query(query: str | None) -> str:
        """Reject blank queries and echoed client error messages.

        Raises:
            ValidationError: If the query cannot be searched
        """
        if not isinstance(query, str) or not query.strip():
            raise ValidationError("Search query is required")
        if any(marker in query for marker in REJECTED_QUERY_MARKERS):
            raise ValidationError(
                "Invalid search query. Please try again with a different query."
            )
        return query.strip()

    async def search(
        self,
        query: str | None,
        identity: str,
        filters: Iterable[str] = (),
    ) -> SearchOutcome:
        """Resolve search results for a query on behalf of a client.

        Args:
            query: Free-text search query
            identity: Client identity used for rate limiting
            filters: Optional dietary filter terms

        Returns:
            SearchOutcome with the serialized recipes and response metadata

        Raises:
            RateLimited: If the client exhausted its quota
            ValidationError: If the query is blank or invalid
            ConfigurationError: If upstream credentials are missing
            UpstreamError: On upstream failure or timeout
            MalformedResponse: If no recipes could be recovered
            SearchFailed: On any other unexpected error
        """
        timer = PhaseTimer()

        decision = self._rate_limiter.admit(identity)
        if not decision.allowed:
            self._metrics.record_rate_limited()
            logger.info("Rate limited client %s", identity)
            raise RateLimited(
                self._rate_limiter.reset_message(decision),
                decision=decision,
                retry_after=self._rate_limiter.seconds_until_reset(decision),
            )

        query = self.validate_query(query)
        filters = list(filters)
        prompt_query = compose_query(query, filters)
        key = build_cache_key(query, filters)
        timer.tick("RateLimit")

        # Durations of this request's own fetch; stays empty for joined fetches
        fetch_timings: dict[str, int] = {}

        async def produce() -> str:
            fetch_timer = PhaseTimer()
            raw = await self._generator.generate(prompt_query)
            api_ms = fetch_timer.tick("ApiCall")
            self._metrics.record_upstream_call(api_ms)

            parsed = try_parse_recipes(raw)
            if isinstance(parsed, ParseErr):
                logger.warning("Unusable recipe output for %r (%s): %s", key, parsed.kind, parsed.message)
                raise MalformedResponse(parsed.message)

            payload = serialize_recipes(parsed.recipes)
            fetch_timer.tick("Processing")
            fetch_timings.update(fetch_timer.timings)
            return payload

        try:
            resolution = await self._cache.resolve(key, produce)
        except ConfigurationError as e:
            self._metrics.record_failure()
            logger.error("Search service is misconfigured: %s", e)
            raise
        except (UpstreamError, MalformedResponse) as e:
            self._metrics.record_failure()
            logger.warning("Search failed for %r: %s", key, e)
            raise
        except RecipeSearchError:
            self._metrics.record_failure()
            raise
        except Exception as e:
            self._metrics.record_failure()
            logger.exception("Unexpected error while searching for %r", key)
            raise SearchFailed(str(e)) from e

        waited_ms = timer.tick("CacheCheck")
        if not resolution.served_from_cache:
            # A request that joined another request's fetch spent its wait on that upstream call
            api_ms = fetch_timings.get("ApiCall", waited_ms)
            processing_ms = fetch_timings.get("Processing", 0)
            timer.record("CacheCheck", max(0, waited_ms - api_ms - processing_ms))
            timer.record("ApiCall", api_ms)
            timer.record("Processing", processing_ms)

        total = timer.total()
        if resolution.served_from_cache:
            self._metrics.record_hit(total, stale=resolution.state is CacheState.STALE)
        else:
            self._metrics.record_miss(total)

        timings = {"Total": total, **timer.timings}
        return SearchOutcome(
            result=resolution.value,
            cache_status="HIT" if resolution.served_from_cache else "MISS",
            cache_state=resolution.state,
            rate_limit=decision,
            timings=timings,
        )

    def get_stats(self) -> dict:
        """Get search and cache statistics."""
        return {
            "cache": self._cache.get_stats(),
            "search": self._metrics.to_dict(),
            "rate_limit": {
                "limit": self._rate_limiter.limit,
                "window_seconds": self._rate_limiter.window,
                "tracked_clients": self._rate_limiter.store.count_all(),
            },
        }

    @property
    def metrics(self) -> SearchMetrics:
        """Get the search metrics."""
        return self._metrics

    @property
    def cache(self) -> CacheService:
        """Get the underlying cache service."""
        return self._cache
