"""Shared per-process data context: settings, client, cache and rate limiter."""

from __future__ import annotations

from f1stats.api_logging import set_log_dir
from f1stats.cache import ResponseCache
from f1stats.client import AsyncOpenF1Client
from f1stats.config import Settings, get_settings
from f1stats.ratelimit import RateLimiter


class DataContext:
    """Constructed once and passed by reference to every fetcher.

    Usage:
        async with DataContext() as ctx:
            meetings = await MeetingFetcher(ctx).by_year(2024)
    """

    def __init__(
        self,
        settings: Settings | None = None,
        client: AsyncOpenF1Client | None = None,
        cache: ResponseCache | None = None,
        limiter: RateLimiter | None = None,
    ) -> None:
        if settings is not None:
            set_log_dir(settings.log_dir)
        self.settings = settings or get_settings()
        self.client = client or AsyncOpenF1Client(
            base_url=self.settings.base_url,
            timeout=self.settings.request_timeout,
        )
        self.cache = cache or ResponseCache(
            ttl=self.settings.cache_ttl,
            rate_limit_interval=self.settings.min_request_interval,
        )
        self.limiter = limiter or RateLimiter(min_interval=self.settings.min_request_interval)

    async def __aenter__(self) -> DataContext:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP connection."""
        await self.client.close()
