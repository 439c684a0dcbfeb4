"""Rate limit decision domain entity."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of one admission check.

    Attributes:
        allowed: Whether the request was admitted
        limit: Requests allowed per window
        remaining: Requests left in the current window
        reset_at: Unix timestamp (seconds) when the oldest tracked request leaves the window
    """

    allowed: bool
    limit: int
    remaining: int
    reset_at: float

    def seconds_until_reset(self, now: float) -> int:
        """Whole seconds until the window resets, rounded up and never negative."""
        return max(0, math.ceil(self.reset_at - now))

    def to_headers(self) -> dict[str, str]:
        """Render the X-RateLimit-* response headers (reset in epoch milliseconds)."""
        return {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(int(self.reset_at * 1000)),
        }
