"""
In-process sliding window rate limiter

Counts requests per key (client IP) over a rolling window. State lives in the
process, matching the single-instance token store.
"""

import time
from collections import deque
from typing import Callable, Deque, Dict

from fastapi import Request, status

from authsync.api.error import ClientError
from authsync.domain.entities import ErrorKind
from authsync.libs.result import Error


class SlidingWindowRateLimiter:
    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock
        self._hits: Dict[str, Deque[float]] = {}
        self._last_cleanup = clock()

    def _prune(self, hits: Deque[float], now: float) -> None:
        window_start = now - self.window_seconds
        while hits and hits[0] <= window_start:
            hits.popleft()

    def _cleanup(self, now: float) -> None:
        # Drop keys idle for a full window so the map does not grow unbounded
        for key in list(self._hits):
            hits = self._hits[key]
            self._prune(hits, now)
            if not hits:
                del self._hits[key]
        self._last_cleanup = now

    def hit(self, key: str) -> bool:
        """Record a request for key; returns False when the key is over its limit"""
        if self.max_requests <= 0:
            return True

        now = self.clock()
        if now - self._last_cleanup >= self.window_seconds:
            self._cleanup(now)

        hits = self._hits.setdefault(key, deque())
        self._prune(hits, now)
        if len(hits) >= self.max_requests:
            return False
        hits.append(now)
        return True

    def remaining(self, key: str) -> int:
        hits = self._hits.get(key)
        if not hits:
            return self.max_requests
        self._prune(hits, self.clock())
        return max(self.max_requests - len(hits), 0)

    def reset(self) -> None:
        self._hits.clear()


def get_client_ip(request: Request) -> str:
    if getattr(request.app.state, "trust_proxy_headers", False):
        xff = request.headers.get("x-forwarded-for")
        if xff:
            return xff.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


async def enforce_password_reset_rate_limit(request: Request) -> None:
    """Route dependency: stricter per-client limit for reset email requests"""
    limiter: SlidingWindowRateLimiter = request.app.state.password_reset_limiter
    if not limiter.hit(get_client_ip(request)):
        raise ClientError(
            Error(
                ErrorKind.too_many_requests.value,
                "Too many password reset attempts, please try again later.",
            ),
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        )
