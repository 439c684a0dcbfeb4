"""Request admission control.

RateLimitService applies a per-client sliding window on top of a RateStore.
FixedWindowLimiter is the simpler global counter used for image generation.
"""

import math
import threading
import time
from collections.abc import Callable

from recipe_search.config import Settings, get_settings
from recipe_search.entities import RateLimitDecision
from recipe_search.protocols import RateStore


class RateLimitService:
    """Sliding-window rate limiter keyed by client identity.

    Each client may be admitted `limit` times within any `window` seconds.
    Timestamps older than the window are pruned lazily on every check.

    Example:
        ```python
        limiter = RateLimitService(store=InMemoryRateRepository.create(500, 60))
        decision = limiter.admit("203.0.113.7")
        if not decision.allowed:
            print(limiter.reset_message(decision))
        ```
    """

    def __init__(
        self,
        store: RateStore,
        limit: int | None = None,
        window: float | None = None,
        clock: Callable[[], float] | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the rate limiter.

        Args:
            store: Per-client timestamp storage (required).
            limit: Requests allowed per window. Defaults to settings.
            window: Window length in seconds. Defaults to settings.
            clock: Time source returning Unix seconds. Defaults to time.time.
            settings: Application settings. Defaults to the cached settings.
        """
        settings = settings or get_settings()
        self._store = store
        self._limit = limit or settings.rate_limit_requests
        self._window = window or settings.rate_limit_window
        self._clock = clock or time.time
        self._lock = threading.Lock()

    def admit(self, identity: str) -> RateLimitDecision:
        """Admit or reject one request from a client.

        Never raises. A client without history has used none of its quota.

        Args:
            identity: The client identity (e.g. forwarded IP address)

        Returns:
            RateLimitDecision for this request
        """
        with self._lock:
            now = self._clock()
            cutoff = now - self._window
            timestamps = [t for t in (self._store.get(identity) or []) if t > cutoff]

            if len(timestamps) >= self._limit:
                self._store.set(identity, timestamps)
                return RateLimitDecision(
                    allowed=False,
                    limit=self._limit,
                    remaining=0,
                    reset_at=timestamps[0] + self._window,
                )

            timestamps.append(now)
            self._store.set(identity, timestamps)
            return RateLimitDecision(
                allowed=True,
                limit=self._limit,
                remaining=self._limit - len(timestamps),
                reset_at=timestamps[0] + self._window,
            )

    def reset_message(self, decision: RateLimitDecision) -> str:
        """Human-readable retry message for a rejected request."""
        seconds = decision.seconds_until_reset(self._clock())
        return f"Rate limit exceeded. Please try again in {seconds} seconds."

    def seconds_until_reset(self, decision: RateLimitDecision) -> int:
        """Whole seconds until a decision's window resets."""
        return decision.seconds_until_reset(self._clock())

    @property
    def limit(self) -> int:
        """Requests allowed per window."""
        return self._limit

    @property
    def window(self) -> float:
        """Window length in seconds."""
        return self._window

    @property
    def store(self) -> RateStore:
        """Get the underlying store (for testing)."""
        return self._store


class FixedWindowLimiter:
    """Global request counter that resets every `window` seconds."""

    def __init__(
        self,
        limit: int,
        window: float = 60.0,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._limit = limit
        self._window = window
        self._clock = clock or time.time
        self._count = 0
        self._window_start = self._clock()
        self._lock = threading.Lock()

    def acquire(self) -> bool:
        """Take one slot from the current window. Returns False when exhausted."""
        with self._lock:
            now = self._clock()
            if now - self._window_start >= self._window:
                self._count = 0
                self._window_start = now
            if self._count >= self._limit:
                return False
            self._count += 1
            return True

    def seconds_until_reset(self) -> int:
        """Whole seconds until the counter resets."""
        remaining = self._window_start + self._window - self._clock()
        return max(0, math.ceil(remaining))

    @property
    def remaining(self) -> int:
        """Slots left in the current window (without rolling the window)."""
        return max(0, self._limit - self._count)
