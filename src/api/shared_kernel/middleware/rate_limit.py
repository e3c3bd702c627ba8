"""Per-client request rate limiting.

A token bucket per client address: each bucket holds up to
``max_requests`` tokens and refills continuously so that a full bucket is
restored after ``window_seconds``. Buckets live in process memory, so
limits are per worker. A bucket left untouched for a whole window is full
again and is evicted, so memory is bounded by the clients seen within
roughly one window.
"""

from __future__ import annotations

import math
import time
from collections.abc import Callable
from dataclasses import dataclass

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from shared_kernel.errors import AppError
from shared_kernel.middleware.observability import (
    DefaultRateLimitProbe,
    RateLimitProbe,
)
from shared_kernel.responses import error_response

RATE_LIMITED_MESSAGE = (
    "Too many requests, try again later. Please wait a few minutes."
)


@dataclass
class TokenBucket:
    """Token bucket for one client."""

    tokens: float
    last_update: float

    def refill(self, rate: float, capacity: int, now: float) -> None:
        """Refill tokens based on elapsed time."""
        elapsed = max(0.0, now - self.last_update)
        self.tokens = min(float(capacity), self.tokens + elapsed * rate)
        self.last_update = now

    def consume(self, count: int = 1) -> bool:
        """Try to consume tokens. Returns True if successful."""
        if self.tokens >= count:
            self.tokens -= count
            return True
        return False


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of a rate limit check."""

    allowed: bool
    limit: int
    remaining: int
    retry_after: int = 0

    def to_headers(self) -> dict[str, str]:
        headers = {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(max(0, self.remaining)),
        }
        if not self.allowed:
            headers["Retry-After"] = str(self.retry_after)
        return headers


class RateLimiter:
    """In-memory token bucket limiter keyed by client identifier."""

    def __init__(
        self,
        max_requests: int,
        window_seconds: int,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_requests < 1 or window_seconds < 1:
            raise ValueError("max_requests and window_seconds must be positive")
        self._capacity = max_requests
        self._rate = max_requests / window_seconds
        self._window = float(window_seconds)
        self._clock = clock
        self._buckets: dict[str, TokenBucket] = {}
        self._last_eviction = clock()

    @property
    def tracked_clients(self) -> int:
        """Number of clients currently holding a bucket."""
        return len(self._buckets)

    def check(self, key: str) -> RateLimitDecision:
        """Consume one token for ``key`` if available."""
        now = self._clock()
        self._evict_idle(now)
        bucket = self._buckets.get(key)
        if bucket is None:
            bucket = TokenBucket(tokens=float(self._capacity), last_update=now)
            self._buckets[key] = bucket
        else:
            bucket.refill(self._rate, self._capacity, now)

        if bucket.consume():
            return RateLimitDecision(
                allowed=True,
                limit=self._capacity,
                remaining=int(bucket.tokens),
            )

        retry_after = math.ceil((1 - bucket.tokens) / self._rate)
        return RateLimitDecision(
            allowed=False,
            limit=self._capacity,
            remaining=0,
            retry_after=max(1, retry_after),
        )

    def reset(self) -> None:
        """Forget every bucket."""
        self._buckets.clear()

    def _evict_idle(self, now: float) -> None:
        # Sweep at most once per window.
        if now - self._last_eviction < self._window:
            return
        self._last_eviction = now
        idle = [
            key
            for key, bucket in self._buckets.items()
            if now - bucket.last_update >= self._window
        ]
        for key in idle:
            del self._buckets[key]


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Rejects requests from clients that exhausted their bucket with 429."""

    def __init__(
        self,
        app: ASGIApp,
        limiter: RateLimiter,
        probe: RateLimitProbe | None = None,
    ):
        super().__init__(app)
        self._limiter = limiter
        self._probe = probe or DefaultRateLimitProbe()

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        client = request.client.host if request.client else "unknown"
        decision = self._limiter.check(client)
        if not decision.allowed:
            self._probe.rate_limit_exceeded(
                client=client,
                path=request.url.path,
                retry_after=decision.retry_after,
            )
            return error_response(
                AppError.rate_limited(RATE_LIMITED_MESSAGE),
                headers=decision.to_headers(),
            )

        response = await call_next(request)
        response.headers.update(decision.to_headers())
        return response
