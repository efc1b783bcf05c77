"""
Fixed-window request rate limiting.

Limiters are FastAPI dependencies keyed by client address. Each limiter
owns its own counters, so a route-level limiter and the global API limiter
are counted independently.
"""

import logging
import math
import threading
import time
from typing import Callable, Dict, List, Tuple

from fastapi import HTTPException, Request, status

from app.core.config import settings

logger = logging.getLogger(__name__)


class FixedWindowRateLimiter:
    """Allow at most `limit` requests per client within each `window_seconds` window."""

    _registry: List["FixedWindowRateLimiter"] = []

    def __init__(
        self,
        limit: int,
        window_seconds: int,
        scope: str = "global",
        clock: Callable[[], float] = time.monotonic,
    ):
        self.limit = limit
        self.window_seconds = window_seconds
        self.scope = scope
        self._clock = clock
        self._lock = threading.Lock()
        # client key -> (window start, hits in window)
        self._windows: Dict[str, Tuple[float, int]] = {}
        self._last_sweep = clock()
        FixedWindowRateLimiter._registry.append(self)

    def hit(self, key: str) -> Tuple[bool, int]:
        """
        Record one request for `key`.

        Returns:
            (allowed, retry_after_seconds)
        """
        now = self._clock()
        with self._lock:
            if now - self._last_sweep >= self.window_seconds:
                self._sweep(now)

            window_start, count = self._windows.get(key, (now, 0))
            if now - window_start >= self.window_seconds:
                window_start, count = now, 0

            if count >= self.limit:
                retry_after = math.ceil(self.window_seconds - (now - window_start))
                return False, max(retry_after, 1)

            self._windows[key] = (window_start, count + 1)
            return True, 0

    def _sweep(self, now: float) -> None:
        """Forget clients whose window has expired. Caller holds the lock."""
        expired = [
            key for key, (window_start, _) in self._windows.items()
            if now - window_start >= self.window_seconds
        ]
        for key in expired:
            del self._windows[key]
        self._last_sweep = now

    @property
    def tracked_clients(self) -> int:
        return len(self._windows)

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()

    @classmethod
    def reset_all(cls) -> None:
        for limiter in cls._registry:
            limiter.reset()

    def __call__(self, request: Request) -> None:
        if not settings.RATE_LIMIT_ENABLED:
            return

        client = request.client.host if request.client else "anonymous"
        allowed, retry_after = self.hit(f"{self.scope}:{client}")

        if not allowed:
            logger.warning(f"Rate limit exceeded for {client} on scope '{self.scope}'")
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail="Too many requests - rate limit exceeded",
                headers={"Retry-After": str(retry_after)},
            )


global_rate_limiter = FixedWindowRateLimiter(
    limit=settings.RATE_LIMIT_REQUESTS,
    window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
    scope="global",
)

description_rate_limiter = FixedWindowRateLimiter(
    limit=settings.DESCRIPTION_RATE_LIMIT_REQUESTS,
    window_seconds=settings.DESCRIPTION_RATE_LIMIT_WINDOW_SECONDS,
    scope="generate-description",
)
