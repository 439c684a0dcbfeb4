from dataclasses import dataclass


@dataclass
class SearchMetrics:
    """Track counters for the search endpoint."""

    total_queries: int = 0
    cache_hits: int = 0
    stale_hits: int = 0
    cache_misses: int = 0
    rate_limited: int = 0
    failures: int = 0
    total_lookup_time_ms: float = 0.0
    total_upstream_time_ms: float = 0.0
    upstream_calls: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate (fresh and stale hits)."""
        if self.total_queries == 0:
            return 0.0
        return self.cache_hits / self.total_queries

    @property
    def avg_lookup_time_ms(self) -> float:
        """Calculate average time to answer a query."""
        if self.total_queries == 0:
            return 0.0
        return self.total_lookup_time_ms / self.total_queries

    def record_hit(self, lookup_time_ms: float, stale: bool = False) -> None:
        """Record a cache hit."""
        self.total_queries += 1
        self.cache_hits += 1
        if stale:
            self.stale_hits += 1
        self.total_lookup_time_ms += lookup_time_ms

    def record_miss(self, lookup_time_ms: float) -> None:
        """Record a cache miss."""
        self.total_queries += 1
        self.cache_misses += 1
        self.total_lookup_time_ms += lookup_time_ms

    def record_upstream_call(self, duration_ms: float) -> None:
        """Record an upstream generation call."""
        self.upstream_calls += 1
        self.total_upstream_time_ms += duration_ms

    def record_rate_limited(self) -> None:
        self.rate_limited += 1

    def record_failure(self) -> None:
        self.failures += 1

    def to_dict(self) -> dict[str, float | int]:
        """Convert metrics to dictionary."""
        return {
            "total_queries": self.total_queries,
            "cache_hits": self.cache_hits,
            "stale_hits": self.stale_hits,
            "cache_misses": self.cache_misses,
            "hit_rate": self.hit_rate,
            "avg_lookup_time_ms": self.avg_lookup_time_ms,
            "rate_limited": self.rate_limited,
            "failures": self.failures,
            "upstream_calls": self.upstream_calls,
            "total_upstream_time_ms": self.total_upstream_time_ms,
        }
