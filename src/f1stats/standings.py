"""Championship standings computed from completed Grand Prix race results.

The aggregator walks a season's race sessions in chronological order, reduces
each completed race to its final classification and folds the points table over
it. Drivers and teams start at zero so that entrants who never scored still
appear at the bottom of the tables. Ties on points are broken by wins; entries
tied on both keep roster order.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import TypeVar

from f1stats._dates import utcnow
from f1stats.api_logging import get_logger, log_service_call
from f1stats.config import DEFAULT_POINTS_TABLE
from f1stats.context import DataContext
from f1stats.data import keys
from f1stats.data.drivers import DriverFetcher
from f1stats.data.positions import PositionFetcher
from f1stats.data.sessions import SessionFetcher
from f1stats.derived import build_constructors
from f1stats.exceptions import F1DataError, MissingDataError
from f1stats.models.driver import Driver
from f1stats.models.position import Position
from f1stats.models.session import Session
from f1stats.models.standings import ConstructorStanding, DriverStanding, StandingsResult

K = TypeVar("K")


def points_for_rank(rank: int, table: Sequence[int] = DEFAULT_POINTS_TABLE) -> int:
    """Points for a zero-based finishing rank; ranks beyond the table earn zero."""
    if 0 <= rank < len(table):
        return table[rank]
    return 0


@dataclass
class _Tally:
    points: int = 0
    wins: int = 0
    podiums: int = 0

    def score(self, rank: int, table: Sequence[int]) -> None:
        self.points += points_for_rank(rank, table)
        if rank == 0:
            self.wins += 1
        if rank < 3:
            self.podiums += 1


def _ranked(entries: Iterable[tuple[K, _Tally]]) -> list[tuple[int, K, _Tally]]:
    # sorted() is stable: entries tied on points and wins keep their input order
    ordered = sorted(entries, key=lambda item: (-item[1].points, -item[1].wins))
    return [(position, key, tally) for position, (key, tally) in enumerate(ordered, start=1)]


class SeasonTally:
    """Running point, win and podium counters for a roster and its teams."""

    def __init__(self, roster: Sequence[Driver], points_table: Sequence[int] = DEFAULT_POINTS_TABLE) -> None:
        self._table = tuple(points_table)
        self._drivers = [(driver, _Tally()) for driver in roster]
        self._by_number: dict[int, tuple[Driver, _Tally]] = {}
        for driver, tally in self._drivers:
            if driver.driver_number is not None:
                self._by_number.setdefault(driver.driver_number, (driver, tally))
        self._constructors = build_constructors(roster)
        self._teams = {constructor.name: _Tally() for constructor in self._constructors}

    def apply_race(self, classification: Sequence[Position]) -> int:
        """Score one race's final classification. Returns the number of roster drivers scored.

        Ranks are zero-based positions in *classification*. An entry for a driver
        missing from the roster consumes its rank but awards nobody.
        """
        scored = 0
        for rank, entry in enumerate(classification):
            match = self._by_number.get(entry.driver_number)  # type: ignore[arg-type]
            if match is None:
                continue
            driver, tally = match
            tally.score(rank, self._table)
            if driver.team_name in self._teams:
                self._teams[driver.team_name].score(rank, self._table)
            scored += 1
        return scored

    def driver_standings(self) -> tuple[DriverStanding, ...]:
        return tuple(
            DriverStanding(
                position=position,
                driver=driver,
                points=tally.points,
                wins=tally.wins,
                podiums=tally.podiums,
            )
            for position, driver, tally in _ranked(self._drivers)
        )

    def constructor_standings(self) -> tuple[ConstructorStanding, ...]:
        entries = [(constructor, self._teams[constructor.name]) for constructor in self._constructors]
        return tuple(
            ConstructorStanding(
                position=position,
                constructor=constructor,
                points=tally.points,
                wins=tally.wins,
                podiums=tally.podiums,
            )
            for position, constructor, tally in _ranked(entries)
        )


class StandingsAggregator:
    """Computes :class:`StandingsResult` tables for a season."""

    def __init__(
        self,
        context: DataContext,
        sessions: SessionFetcher | None = None,
        drivers: DriverFetcher | None = None,
        positions: PositionFetcher | None = None,
        now: Callable[[], datetime] = utcnow,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        self._ctx = context
        self._sessions = sessions or SessionFetcher(context, now)
        self._drivers = drivers or DriverFetcher(context, sessions=self._sessions, now=now)
        self._positions = positions or PositionFetcher(context, now)
        self._now = now
        self._sleep = sleep

    @log_service_call
    async def compute(self, year: int) -> StandingsResult:
        """Standings for *year*, cached under the season's standings key.

        Raises:
            MissingDataError: the season has no race sessions.
            FetchError: the race session list or the roster could not be fetched.
        """
        return await self._ctx.cache.get_or_fetch(keys.standings(year), lambda: self._compute(year))

    async def _compute(self, year: int) -> StandingsResult:
        logger = get_logger()
        settings = self._ctx.settings

        races = await self._sessions.races_by_year(year)
        if not races:
            raise MissingDataError(
                "race_sessions", {"year": year}, f"No race sessions found for year {year}",
            )

        now = self._now()
        completed = [race for race in races if race.has_ended(now)]
        logger.info(
            "Standings %d: %d completed of %d race sessions", year, len(completed), len(races),
        )

        roster = await self._drivers.for_year(year)
        tally = SeasonTally(roster, settings.points_table)

        skipped: list[int | None] = []
        fetched = 0
        for race in completed:
            if race.session_key is None:
                logger.warning("Skipping race at %s: no session key", race.location)
                skipped.append(None)
                continue
            if fetched:
                await self._sleep(settings.inter_race_delay)
            fetched += 1
            classification = await self._classification(race)
            if not classification:
                skipped.append(race.session_key)
                continue
            scored = tally.apply_race(classification)
            logger.info(
                "Standings %d: scored %d drivers at %s (session %s)",
                year, scored, race.location, race.session_key,
            )

        drivers = tally.driver_standings()
        constructors = tally.constructor_standings()
        if drivers and constructors:
            logger.info(
                "Standings %d: leaders %s (%d pts), %s (%d pts)",
                year, drivers[0].driver.display_name, drivers[0].points,
                constructors[0].name, constructors[0].points,
            )

        return StandingsResult(
            year=year,
            drivers=drivers,
            constructors=constructors,
            total_races=len(races),
            completed_races=len(completed),
            upcoming_races=len(races) - len(completed),
            skipped_sessions=tuple(skipped),
            last_updated=self._now(),
        )

    async def _classification(self, race: Session) -> list[Position]:
        """Final classification of one race; empty when it cannot be retrieved."""
        logger = get_logger()
        try:
            positions = await self._positions.final(race.session_key)  # type: ignore[arg-type]
        except F1DataError as exc:
            logger.warning(
                "Skipping race session %s at %s: %s", race.session_key, race.location, exc,
            )
            return []
        if not positions:
            logger.warning(
                "No positions found for race session %s at %s", race.session_key, race.location,
            )
        return positions
