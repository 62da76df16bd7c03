"""Simple in-memory rate limiter for the public registration endpoint."""

from __future__ import annotations

import time
from collections import defaultdict
from threading import Lock

from technofest.services.throttle import Clock


class RateLimiter:
    """Sliding-window rate limiter keyed by client address.

    Parameters
    ----------
    max_requests : int
        Requests allowed within *window_seconds*.
    window_seconds : float
        Sliding window duration in seconds.
    max_keys : int
        Tracked keys before a forced cleanup.
    """

    def __init__(
        self,
        max_requests: int = 10,
        window_seconds: float = 15 * 60,
        max_keys: int = 10000,
        clock: Clock = time.time,
    ) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.max_keys = max_keys
        self._clock = clock
        # key -> list of timestamps
        self._hits: dict[str, list[float]] = defaultdict(list)
        self._cleanup_counter = 0
        self._lock = Lock()

    def hit(self, key: str) -> bool:
        """Record a request for *key*; return ``False`` if it exceeds the limit.

        Rejected requests are not recorded.
        """
        now = self._clock()
        with self._lock:
            self._prune(key, now)
            self._maybe_cleanup(now)
            hits = self._hits[key]
            if len(hits) >= self.max_requests:
                return False
            hits.append(now)
            return True

    def reset(self, key: str) -> None:
        """Reset the counter for *key*."""
        with self._lock:
            self._hits.pop(key, None)

    def _prune(self, key: str, now: float) -> None:
        cutoff = now - self.window_seconds
        if key not in self._hits:
            return
        self._hits[key] = [t for t in self._hits[key] if t > cutoff]
        if not self._hits[key]:
            del self._hits[key]

    def _maybe_cleanup(self, now: float) -> None:
        """Periodically drop idle keys to prevent unbounded growth."""
        self._cleanup_counter += 1
        if self._cleanup_counter < 100 and len(self._hits) < self.max_keys:
            return
        self._cleanup_counter = 0
        cutoff = now - self.window_seconds
        idle = [k for k, ts in self._hits.items() if not ts or ts[-1] <= cutoff]
        for k in idle:
            del self._hits[k]
