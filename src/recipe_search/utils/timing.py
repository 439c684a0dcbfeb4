"""Per-request phase timing."""

import time


class PhaseTimer:
    """Record the duration of consecutive request phases in milliseconds.

    Example:
        ```python
        timer = PhaseTimer()
        ...  # rate limiting
        timer.tick("RateLimit")
        ...  # cache lookup
        timer.tick("CacheCheck")
        timer.timings  # {"RateLimit": 0, "CacheCheck": 1}
        ```
    """

    def __init__(self) -> None:
        self._started = time.perf_counter()
        self._last = self._started
        self.timings: dict[str, int] = {}

    def tick(self, label: str) -> int:
        """Close the current phase under a label and return its duration."""
        now = time.perf_counter()
        duration_ms = int((now - self._last) * 1000)
        self._last = now
        self.timings[label] = self.timings.get(label, 0) + duration_ms
        return duration_ms

    def total(self) -> int:
        """Milliseconds since the timer was created."""
        return int((time.perf_counter() - self._started) * 1000)

    def record(self, label: str, duration_ms: int) -> None:
        """Set a phase duration measured elsewhere."""
        self.timings[label] = duration_ms
