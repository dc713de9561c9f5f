"""Minimum-interval rate limiting for calls to the people search API."""
from __future__ import annotations

import asyncio
import time
from typing import Optional


class RateLimiter:
    """Enforce a minimum interval between calls sharing one event loop."""

    def __init__(self, calls_per_minute: Optional[float]) -> None:
        self._interval = 60.0 / float(calls_per_minute) if calls_per_minute else 0.0
        self._lock: Optional[asyncio.Lock] = None
        self._next_available = 0.0

    @property
    def interval(self) -> float:
        return self._interval

    async def acquire(self) -> None:
        if self._interval <= 0:
            return
        if self._lock is None:
            self._lock = asyncio.Lock()
        async with self._lock:
            now = time.monotonic()
            if now < self._next_available:
                await asyncio.sleep(self._next_available - now)
                now = time.monotonic()
            self._next_available = now + self._interval


__all__ = ["RateLimiter"]
