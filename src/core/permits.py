"""Counting admission gate.

Tracks how many admitted calls may still be in flight. Acquire never
blocks: the pacing tick asks once and moves on if the pool is exhausted.
"""

from __future__ import annotations

import threading


class PermitPool:
    # Thread-safe counter in [0, limit]
    def __init__(self, limit: int) -> None:
        self._limit = int(limit)
        if self._limit <= 0:
            raise ValueError("limit must be > 0")
        self._available = self._limit
        self._lock = threading.Lock()

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def available(self) -> int:
        with self._lock:
            return self._available

    def try_acquire(self) -> bool:
        """Take one permit if one is free; return False otherwise."""
        with self._lock:
            if self._available > 0:
                self._available -= 1
                return True
            return False

    def release(self) -> None:
        """Return one permit. Releasing more than was acquired is a bug."""
        with self._lock:
            if self._available >= self._limit:
                raise ValueError("PermitPool released too many times")
            self._available += 1
