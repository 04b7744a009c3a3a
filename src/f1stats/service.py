"""Season statistics service — the accessor surface consumed by presentation code."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from datetime import datetime

from f1stats._dates import utcnow
from f1stats.api_logging import get_logger, log_service_call
from f1stats.cache import CacheStats
from f1stats.config import Settings
from f1stats.context import DataContext
from f1stats.data.drivers import DriverFetcher
from f1stats.data.meetings import MeetingFetcher
from f1stats.data.performance import LapFetcher
from f1stats.data.positions import PositionFetcher
from f1stats.data.sessions import SessionFetcher
from f1stats.derived import CircuitResolver, ConstructorResolver
from f1stats.exceptions import F1DataError
from f1stats.models.circuit import Circuit
from f1stats.models.constructor import Constructor
from f1stats.models.lap import Lap
from f1stats.models.lap_stats import LapTimeStats
from f1stats.models.standings import ConstructorStanding, DriverStanding, StandingsResult
from f1stats.models.summary import SeasonSummary
from f1stats.standings import SeasonTally, StandingsAggregator
from f1stats.summary import SeasonSummaryBuilder


class SeasonStatsService:
    """Wires fetchers, resolvers, aggregator and summary builder over one context.

    Usage:
        async with SeasonStatsService() as stats:
            summary = await stats.season_statistics(2024)
            table = await stats.standings(2024)
    """

    def __init__(
        self,
        context: DataContext | None = None,
        settings: Settings | None = None,
        now: Callable[[], datetime] = utcnow,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        self.context = context or DataContext(settings=settings)
        ctx = self.context
        self.meetings = MeetingFetcher(ctx, now)
        self.sessions = SessionFetcher(ctx, now)
        self.drivers = DriverFetcher(ctx, self.meetings, self.sessions, now)
        self.positions = PositionFetcher(ctx, now)
        self.laps = LapFetcher(ctx, now)
        self.circuit_resolver = CircuitResolver(ctx, self.meetings, now)
        self.constructor_resolver = ConstructorResolver(ctx, self.drivers, now)
        self.aggregator = StandingsAggregator(
            ctx, self.sessions, self.drivers, self.positions, now=now, sleep=sleep,
        )
        self.summary_builder = SeasonSummaryBuilder(
            ctx, self.aggregator, self.circuit_resolver, now,
        )

    async def __aenter__(self) -> SeasonStatsService:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self.context.close()

    def _year(self, year: int | None) -> int:
        return self.context.settings.default_year if year is None else year

    # ── Season views ───────────────────────────────────────────

    async def season_statistics(self, year: int | None = None) -> SeasonSummary:
        return await self.summary_builder.build(self._year(year))

    async def standings(self, year: int | None = None) -> StandingsResult:
        return await self.aggregator.compute(self._year(year))

    async def circuits(self, year: int | None = None) -> list[Circuit]:
        return await self.circuit_resolver.by_year(self._year(year))

    async def upcoming_circuits(self, year: int | None = None) -> list[Circuit]:
        return await self.circuit_resolver.upcoming(self._year(year))

    async def circuit(self, circuit_key: int) -> Circuit | None:
        return await self.circuit_resolver.get(circuit_key)

    async def constructors(self, year: int | None = None) -> list[Constructor]:
        return await self.constructor_resolver.by_year(self._year(year))

    # ── Session views ──────────────────────────────────────────

    async def lap_times(self, session_key: int, driver_number: int | None = None) -> list[Lap]:
        return await self.laps.lap_times(session_key, driver_number)

    async def lap_time_stats(self, session_key: int, driver_number: int) -> LapTimeStats:
        return await self.laps.lap_time_stats(session_key, driver_number)

    # ── Leaders ────────────────────────────────────────────────

    async def championship_leader(self, year: int | None = None) -> DriverStanding | None:
        """Leading driver, or None when standings cannot be computed."""
        try:
            result = await self.standings(year)
        except F1DataError as exc:
            get_logger().warning("Driver leader unavailable for %s: %s", self._year(year), exc)
            return None
        return result.drivers[0] if result.drivers else None

    async def constructor_leader(self, year: int | None = None) -> ConstructorStanding | None:
        """Leading constructor, or None when standings cannot be computed."""
        try:
            result = await self.standings(year)
        except F1DataError as exc:
            get_logger().warning("Constructor leader unavailable for %s: %s", self._year(year), exc)
            return None
        return result.constructors[0] if result.constructors else None

    @log_service_call
    async def drivers_with_standings(self, year: int | None = None) -> tuple[DriverStanding, ...]:
        """Driver table; falls back to the roster at zero points if standings fail."""
        target = self._year(year)
        try:
            return (await self.standings(target)).drivers
        except F1DataError as exc:
            get_logger().warning("Standings unavailable for %s, using bare roster: %s", target, exc)
        roster = await self.drivers.for_year(target)
        return SeasonTally(roster, self.context.settings.points_table).driver_standings()

    # ── Cache ──────────────────────────────────────────────────

    def clear_cache(self) -> None:
        self.context.cache.clear()

    def cache_stats(self) -> CacheStats:
        return self.context.cache.stats()
