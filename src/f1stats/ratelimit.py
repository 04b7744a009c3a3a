"""Minimum-spacing rate limiter for upstream calls issued in quick succession."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from typing import TypeVar

T = TypeVar("T")

MIN_REQUEST_INTERVAL = 0.35  # OpenF1 allows 3 req/s; 350ms keeps us safe


class RateLimiter:
    """Serializes dispatch so consecutive calls start at least *min_interval* apart.

    Only the dispatch slot is serialized: the wrapped call itself runs outside the
    lock, and its result or exception is returned to the caller unchanged.
    """

    def __init__(
        self,
        min_interval: float = MIN_REQUEST_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_call_time: float | None = None
        self._lock = asyncio.Lock()

    @property
    def last_call_time(self) -> float | None:
        return self._last_call_time

    async def execute(self, call: Callable[[], Awaitable[T]]) -> T:
        """Wait for the next free slot, then run *call*."""
        async with self._lock:
            if self._last_call_time is not None:
                wait = self._last_call_time + self.min_interval - self._clock()
                if wait > 0:
                    await self._sleep(wait)
            self._last_call_time = self._clock()
        return await call()
