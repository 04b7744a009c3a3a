"""Season statistics composed from standings and the season's circuits."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from f1stats._dates import utcnow
from f1stats.api_logging import log_service_call
from f1stats.context import DataContext
from f1stats.data import keys
from f1stats.derived import CircuitResolver
from f1stats.models.circuit import Circuit
from f1stats.models.standings import StandingsResult
from f1stats.models.summary import SeasonSummary
from f1stats.standings import StandingsAggregator


def summarize(year: int, standings: StandingsResult, circuits: list[Circuit], now: datetime) -> SeasonSummary:
    return SeasonSummary(
        year=year,
        total_races=standings.total_races,
        completed_races=standings.completed_races,
        upcoming_races=standings.upcoming_races,
        total_drivers=len(standings.drivers),
        total_constructors=len(standings.constructors),
        circuits=tuple(circuits),
        skipped_sessions=standings.skipped_sessions,
        last_updated=now,
    )


class SeasonSummaryBuilder:
    """Pure composition over the aggregator and the circuit resolver.

    Both collaborators share the context's cache, so a summary built after the
    standings reuses the meetings, sessions and roster already fetched for them.
    """

    def __init__(
        self,
        context: DataContext,
        standings: StandingsAggregator | None = None,
        circuits: CircuitResolver | None = None,
        now: Callable[[], datetime] = utcnow,
    ) -> None:
        self._ctx = context
        self._standings = standings or StandingsAggregator(context, now=now)
        self._circuits = circuits or CircuitResolver(context, now=now)
        self._now = now

    @log_service_call
    async def build(self, year: int) -> SeasonSummary:
        async def produce() -> SeasonSummary:
            standings = await self._standings.compute(year)
            circuits = await self._circuits.by_year(year)
            return summarize(year, standings, circuits, self._now())

        return await self._ctx.cache.get_or_fetch(keys.season_stats(year), produce)
