"""
In-memory sliding-window rate limiter keyed by client identifier.

State lives in the process: it resets on restart and is not shared between
instances, so behind several workers each one enforces its own window.
"""

import threading
import time
from collections import deque
from functools import lru_cache
from typing import Callable, Deque, Dict, Optional

from dinner_menu.config import settings
from dinner_menu.logging import get_logger

logger = get_logger(__name__)


class SlidingWindowRateLimiter:
    def __init__(
        self,
        limit: int = 10,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._requests: Dict[str, Deque[float]] = {}
        self._last_sweep: Optional[float] = None
        self._lock = threading.Lock()

    def allow(self, identifier: str, now: Optional[float] = None) -> bool:
        """Record and admit a request unless `limit` requests already fall inside the window."""
        if now is None:
            now = self._clock()
        with self._lock:
            self._maybe_sweep(now)
            timestamps = self._requests.setdefault(identifier, deque())
            self._prune(timestamps, now)
            if len(timestamps) >= self.limit:
                logger.info(
                    "rate_limit.rejected id=%s count=%s window_s=%s",
                    identifier,
                    len(timestamps),
                    self.window_seconds,
                )
                return False
            timestamps.append(now)
            return True

    def _prune(self, timestamps: Deque[float], now: float) -> None:
        while timestamps and now - timestamps[0] >= self.window_seconds:
            timestamps.popleft()

    def _maybe_sweep(self, now: float) -> None:
        """Drop identifiers with no request left in the window, at most once per window."""
        if self._last_sweep is None:
            self._last_sweep = now
            return
        if now - self._last_sweep < self.window_seconds:
            return
        self._last_sweep = now
        expired = [
            key for key, timestamps in self._requests.items()
            if not timestamps or now - timestamps[-1] >= self.window_seconds
        ]
        for key in expired:
            del self._requests[key]
        if expired:
            logger.debug("rate_limit.sweep removed=%s tracked=%s", len(expired), len(self._requests))

    def reset(self) -> None:
        with self._lock:
            self._requests.clear()
            self._last_sweep = None


@lru_cache
def get_rate_limiter() -> SlidingWindowRateLimiter:
    """Process-wide limiter; routes take it as a dependency so tests can swap it."""
    return SlidingWindowRateLimiter(
        limit=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window_s,
    )
