"""
In-memory fixed-window rate limiter.

One counter per identifier (client IP for login). The table lives in
process memory: it is not shared between worker processes, so a
multi-instance deployment needs a shared store behind the same
``check()`` interface.
"""

import math
import random
import threading
import time
from typing import Callable, Dict, NamedTuple


class RateLimitResult(NamedTuple):
    allowed: bool
    remaining: int
    reset_time: float  # epoch seconds


class _Entry:
    __slots__ = ('count', 'reset_time')

    def __init__(self, count, reset_time):
        self.count = count
        self.reset_time = reset_time


class RateLimiter:

    # Chance of sweeping expired entries on each check
    SWEEP_PROBABILITY = 0.01

    def __init__(self, clock: Callable[[], float] = time.time):
        self.clock = clock
        self._store: Dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def check(self, identifier: str, max_requests: int, window: float) -> RateLimitResult:
        """
        Count one request for ``identifier``.

        - No entry, or its window has elapsed → open a new window
        - Inside the window and under the limit → increment
        - Limit reached → refuse, window unchanged
        """
        if random.random() < self.SWEEP_PROBABILITY:
            self.sweep()

        now = self.clock()

        with self._lock:
            entry = self._store.get(identifier)

            if entry is None or entry.reset_time <= now:
                entry = _Entry(count=1, reset_time=now + window)
                self._store[identifier] = entry
                return RateLimitResult(True, max_requests - 1, entry.reset_time)

            if entry.count >= max_requests:
                return RateLimitResult(False, 0, entry.reset_time)

            entry.count += 1
            return RateLimitResult(True, max_requests - entry.count, entry.reset_time)

    def retry_after(self, result: RateLimitResult) -> int:
        """Whole seconds until the window of ``result`` resets"""
        return max(0, math.ceil(result.reset_time - self.clock()))

    def sweep(self) -> int:
        """Drop expired entries, returns how many were removed"""
        now = self.clock()
        with self._lock:
            expired = [key for key, entry in self._store.items() if entry.reset_time <= now]
            for key in expired:
                del self._store[key]
        return len(expired)

    def reset(self):
        with self._lock:
            self._store.clear()

    def __len__(self):
        return len(self._store)


# Shared by all login requests of this process
login_limiter = RateLimiter()
