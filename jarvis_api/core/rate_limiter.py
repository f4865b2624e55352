from __future__ import annotations

import math
import threading
import time
from typing import Callable, Dict, Tuple

from fastapi import HTTPException, Request

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."
SWEEP_THRESHOLD = 1024


class RateLimiter:
    """Fixed-window request counter keyed by client address."""

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        sweep_threshold: int = SWEEP_THRESHOLD,
    ) -> None:
        self.limit = limit
        self.window_seconds = window_seconds
        self.sweep_threshold = sweep_threshold
        self._clock = clock
        self._hits: Dict[str, Tuple[int, float]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._hits)

    def check(self, key: str) -> int:
        """Count one hit for ``key``; return the remaining budget or raise 429."""
        now = self._clock()
        with self._lock:
            if len(self._hits) >= self.sweep_threshold:
                self._sweep(now)
            count, reset = self._hits.get(key, (0, now + self.window_seconds))
            if now >= reset:
                count = 0
                reset = now + self.window_seconds
            count += 1
            self._hits[key] = (count, reset)
            if count > self.limit:
                retry_after = max(1, math.ceil(reset - now))
                raise HTTPException(429, RATE_LIMIT_MESSAGE, headers={"Retry-After": str(retry_after)})
            return self.limit - count

    def _sweep(self, now: float) -> None:
        # caller holds the lock
        expired = [key for key, (_, reset) in self._hits.items() if now >= reset]
        for key in expired:
            del self._hits[key]

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()


def _client_ip(request: Request, *, trust_proxy: bool = False) -> str:
    """Peer address; ``X-Forwarded-For`` is only honored behind a trusted proxy."""
    if trust_proxy:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def rate_limit_api(request: Request) -> None:
    """Route dependency applying the app-wide limiter to every API call."""
    state = request.app.state
    limiter = getattr(state, "rate_limiter", None)
    if limiter is None:
        return
    settings = getattr(state, "settings", None)
    trust_proxy = bool(getattr(settings, "trust_proxy", False))
    limiter.check(f"api:{_client_ip(request, trust_proxy=trust_proxy)}")
