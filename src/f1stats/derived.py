"""Resources OpenF1 has no endpoint for: circuits (from meetings) and constructors (from drivers)."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime

from f1stats._dates import as_utc, utcnow
from f1stats.api_logging import log_api_call
from f1stats.context import DataContext
from f1stats.data import keys
from f1stats.data.base import Fetcher
from f1stats.data.drivers import DriverFetcher
from f1stats.data.meetings import MeetingFetcher
from f1stats.models.circuit import Circuit
from f1stats.models.constructor import DEFAULT_TEAM_COLOUR, Constructor
from f1stats.models.driver import Driver
from f1stats.models.meeting import Meeting


def circuit_from_meeting(meeting: Meeting) -> Circuit:
    """Project a meeting onto the circuit shape."""
    if meeting.circuit_key is None:
        raise ValueError(f"meeting {meeting.meeting_key} has no circuit_key")
    return Circuit(
        circuit_key=meeting.circuit_key,
        circuit_short_name=meeting.circuit_short_name,
        circuit_name=meeting.meeting_official_name,
        country_code=meeting.country_code,
        country_name=meeting.country_name,
        location=meeting.location,
        date_start=meeting.date_start,
        gmt_offset=meeting.gmt_offset,
        meeting_key=meeting.meeting_key,
    )


def build_circuits(meetings: Iterable[Meeting]) -> list[Circuit]:
    """One circuit per ``circuit_key``, from its first meeting, in meeting order."""
    circuits: dict[int, Circuit] = {}
    for meeting in meetings:
        if meeting.circuit_key is None or meeting.circuit_key in circuits:
            continue
        circuits[meeting.circuit_key] = circuit_from_meeting(meeting)
    return list(circuits.values())


def group_by_team(drivers: Iterable[Driver]) -> dict[str, list[Driver]]:
    """Drivers keyed by team name, teams in order of first appearance."""
    teams: dict[str, list[Driver]] = {}
    for driver in drivers:
        if driver.team_name is None:
            continue
        teams.setdefault(driver.team_name, []).append(driver)
    return teams


def build_constructors(drivers: Iterable[Driver]) -> list[Constructor]:
    """Constructors in order of first appearance; colour comes from the first driver."""
    return [
        Constructor(
            name=name,
            colour=members[0].team_colour or DEFAULT_TEAM_COLOUR,
            drivers=tuple(members),
        )
        for name, members in group_by_team(drivers).items()
    ]


class CircuitResolver(Fetcher):
    resource = "circuits"

    def __init__(
        self,
        context: DataContext,
        meetings: MeetingFetcher | None = None,
        now: Callable[[], datetime] = utcnow,
    ) -> None:
        super().__init__(context, now)
        self._meetings = meetings or MeetingFetcher(context, now)

    @log_api_call
    async def recent(self, limit: int | None = None) -> list[Circuit]:
        limit = limit or self._ctx.settings.meetings_limit

        async def produce() -> list[Circuit]:
            return build_circuits(await self._meetings.recent(limit))

        return await self._cached(keys.circuits_recent(limit), produce)

    @log_api_call
    async def by_year(self, year: int) -> list[Circuit]:
        """Circuits of a season in calendar order."""

        async def produce() -> list[Circuit]:
            return build_circuits(await self._meetings.by_year(year))

        return await self._cached(keys.circuits_year(year), produce)

    @log_api_call
    async def get(self, circuit_key: int) -> Circuit | None:
        async def produce() -> Circuit | None:
            circuits = await self.recent(self._ctx.settings.circuit_lookup_limit)
            return next((c for c in circuits if c.circuit_key == circuit_key), None)

        return await self._cached(keys.circuit(circuit_key), produce)

    @log_api_call
    async def upcoming(self, year: int) -> list[Circuit]:
        """Circuits of *year* whose meeting starts after now."""

        async def produce() -> list[Circuit]:
            now = self._now()
            return [
                c for c in await self.by_year(year)
                if c.date_start is not None and as_utc(c.date_start) > as_utc(now)  # type: ignore[operator]
            ]

        return await self._cached(keys.circuits_upcoming(year), produce)


class ConstructorResolver(Fetcher):
    resource = "constructors"

    def __init__(
        self,
        context: DataContext,
        drivers: DriverFetcher | None = None,
        now: Callable[[], datetime] = utcnow,
    ) -> None:
        super().__init__(context, now)
        self._drivers = drivers or DriverFetcher(context, now=now)

    @log_api_call
    async def by_year(self, year: int) -> list[Constructor]:
        async def produce() -> list[Constructor]:
            return build_constructors(await self._drivers.for_year(year))

        return await self._cached(keys.constructors_year(year), produce)
