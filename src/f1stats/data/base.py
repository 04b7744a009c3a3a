"""Shared plumbing for resource fetchers: caching, throttling and error wrapping."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Any, ClassVar, TypeVar

from f1stats._dates import utcnow
from f1stats.context import DataContext
from f1stats.exceptions import FetchError, OpenF1Error

T = TypeVar("T")


class Fetcher:
    """Base class binding a fetcher to the shared :class:`DataContext`."""

    resource: ClassVar[str] = "resource"

    def __init__(self, context: DataContext, now: Callable[[], datetime] = utcnow) -> None:
        self._ctx = context
        self._now = now

    @property
    def context(self) -> DataContext:
        return self._ctx

    async def _cached(self, key: str, producer: Callable[[], Awaitable[T]]) -> T:
        return await self._ctx.cache.get_or_fetch(key, producer)

    async def _request(
        self,
        call: Callable[[], Awaitable[T]],
        *,
        throttled: bool = False,
        resource: str | None = None,
        **params: Any,
    ) -> T:
        """Issue one upstream call, optionally through the rate limiter.

        Client errors are re-raised as :class:`FetchError` carrying *params*.
        """
        try:
            if throttled:
                return await self._ctx.limiter.execute(call)
            return await call()
        except OpenF1Error as exc:
            raise FetchError(resource or self.resource, params, str(exc)) from exc
