"""Time-bounded memoization of upstream responses, keyed by logical query."""

from __future__ import annotations

import threading
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

T = TypeVar("T")

DEFAULT_TTL = 15 * 60


@dataclass(frozen=True)
class CacheEntry:
    key: str
    value: Any
    stored_at: float


@dataclass(frozen=True)
class CacheStats:
    total_entries: int
    ttl_seconds: float
    rate_limit_interval_seconds: float | None = None


class ResponseCache:
    """In-memory cache with a fixed time-to-live.

    At most one entry exists per key. Failed producers leave no entry behind, so
    the next lookup for the same key retries. The lock guards map access only;
    it is never held across an ``await``.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL,
        clock: Callable[[], float] = time.monotonic,
        rate_limit_interval: float | None = None,
    ) -> None:
        self.ttl = ttl
        self._clock = clock
        self._rate_limit_interval = rate_limit_interval
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            entry = self._entries.get(key)  # type: ignore[arg-type]
        return entry is not None and self._is_fresh(entry)

    def _is_fresh(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.stored_at < self.ttl

    async def get_or_fetch(self, key: str, producer: Callable[[], Awaitable[T]]) -> T:
        """Return the fresh value for *key*, or await *producer* and store its result."""
        with self._lock:
            entry = self._entries.get(key)
        if entry is not None and self._is_fresh(entry):
            return entry.value  # type: ignore[no-any-return]

        value = await producer()
        with self._lock:
            self._entries[key] = CacheEntry(key=key, value=value, stored_at=self._clock())
        return value

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._entries.clear()

    def stats(self) -> CacheStats:
        return CacheStats(
            total_entries=len(self),
            ttl_seconds=self.ttl,
            rate_limit_interval_seconds=self._rate_limit_interval,
        )
