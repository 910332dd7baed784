"""Per-client fixed window rate limiting."""

import math
import time
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache

from hookcord.env import get_settings

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


@dataclass
class RateLimitResult:
    """Outcome of counting one request against a client's window.

    Attributes:
        allowed: Whether the request is within the limit
        limit: Requests allowed per window
        remaining: Requests left in the current window
        reset_seconds: Seconds until the window resets
    """

    allowed: bool
    limit: int
    remaining: int
    reset_seconds: int

    def headers(self) -> dict[str, str]:
        """Standard RateLimit-* response headers."""
        headers = {
            "RateLimit-Limit": str(self.limit),
            "RateLimit-Remaining": str(self.remaining),
            "RateLimit-Reset": str(self.reset_seconds),
        }
        if not self.allowed:
            headers["Retry-After"] = str(self.reset_seconds)
        return headers


class FixedWindowRateLimiter:
    """Counts requests per client key in fixed time windows."""

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        # key -> (window start, hits)
        self._windows: dict[str, tuple[float, int]] = {}
        self._last_prune = clock()

    def hit(self, key: str) -> RateLimitResult:
        """Count a request for key and report whether it is allowed."""
        now = self._clock()
        start, hits = self._windows.get(key, (now, 0))
        if now - start >= self.window_seconds:
            start, hits = now, 0

        hits += 1
        self._windows[key] = (start, hits)
        self._prune(now)

        reset = max(math.ceil(start + self.window_seconds - now), 0)
        return RateLimitResult(
            allowed=hits <= self.max_requests,
            limit=self.max_requests,
            remaining=max(self.max_requests - hits, 0),
            reset_seconds=reset,
        )

    def _prune(self, now: float) -> None:
        # At most one sweep per window
        if now - self._last_prune < self.window_seconds:
            return
        self._last_prune = now
        expired = [k for k, (start, _) in self._windows.items() if now - start >= self.window_seconds]
        for key in expired:
            del self._windows[key]


@lru_cache
def get_rate_limiter() -> FixedWindowRateLimiter:
    """Get the process-wide rate limiter built from settings."""
    config = get_settings().rate_limit
    return FixedWindowRateLimiter(
        max_requests=config.max,
        window_seconds=config.window_ms / 1000,
    )
