"""Driver fetchers, including the year-scoped roster lookup chain."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime

from f1stats._dates import utcnow
from f1stats.api_logging import log_api_call
from f1stats.context import DataContext
from f1stats.data import keys
from f1stats.data.base import Fetcher
from f1stats.data.meetings import MeetingFetcher
from f1stats.data.pipeline import LookupPipeline, LookupStep, take_last
from f1stats.data.sessions import SessionFetcher
from f1stats.exceptions import MissingDataError
from f1stats.models.driver import Driver
from f1stats.models.meeting import Meeting
from f1stats.models.session import Session


def unique_drivers(drivers: Iterable[Driver]) -> list[Driver]:
    """Drop repeated driver numbers, keeping the first record of each."""
    seen: set[int | None] = set()
    result: list[Driver] = []
    for driver in drivers:
        if driver.driver_number in seen:
            continue
        seen.add(driver.driver_number)
        result.append(driver)
    return result


class DriverFetcher(Fetcher):
    resource = "drivers"

    def __init__(
        self,
        context: DataContext,
        meetings: MeetingFetcher | None = None,
        sessions: SessionFetcher | None = None,
        now: Callable[[], datetime] = utcnow,
    ) -> None:
        super().__init__(context, now)
        self._meetings = meetings or MeetingFetcher(context, now)
        self._sessions = sessions or SessionFetcher(context, now)

    @log_api_call
    async def for_session(self, session_key: int, *, throttled: bool = False) -> list[Driver]:
        """Drivers entered in one session, in upstream order."""

        async def produce() -> list[Driver]:
            drivers = await self._request(
                lambda: self._ctx.client.drivers(session_key=session_key),
                throttled=throttled,
                session_key=session_key,
            )
            return unique_drivers(drivers)

        return await self._cached(keys.drivers_session(session_key), produce)

    @log_api_call
    async def latest(self) -> list[Driver]:
        """Drivers of the most recent session known upstream."""

        async def produce() -> list[Driver]:
            session = await self._sessions.latest()
            if session is None or session.session_key is None:
                raise MissingDataError("sessions", {}, "No sessions are available upstream")
            return await self.for_session(session.session_key)

        return await self._cached(keys.drivers_latest(), produce)

    def roster_pipeline(self, year: int) -> LookupPipeline:
        """year → meetings → last meeting → its sessions → last session → drivers."""

        async def sessions_of(meeting: Meeting) -> list[Session]:
            return await self._sessions.by_meeting(meeting.meeting_key)  # type: ignore[arg-type]

        async def drivers_of(session: Session) -> list[Driver]:
            drivers = await self.for_session(session.session_key, throttled=True)  # type: ignore[arg-type]
            if not drivers:
                raise MissingDataError(
                    "drivers",
                    {"session_key": session.session_key},
                    f"No drivers found for session {session.session_key}",
                )
            return drivers

        return LookupPipeline(
            "drivers",
            [
                LookupStep("meetings", self._meetings.by_year),
                LookupStep(
                    "latest_meeting",
                    take_last("meetings", f"No meetings found for year {year}", year=year),
                ),
                LookupStep("sessions", sessions_of),
                LookupStep(
                    "latest_session",
                    take_last("sessions", f"No sessions found for the last meeting of {year}", year=year),
                ),
                LookupStep("drivers", drivers_of),
            ],
        )

    @log_api_call
    async def for_year(self, year: int) -> list[Driver]:
        """The season roster, taken from the last session of the last meeting."""

        async def produce() -> list[Driver]:
            return await self.roster_pipeline(year).run(year, year=year)  # type: ignore[no-any-return]

        return await self._cached(keys.drivers_year(year), produce)

    @log_api_call
    async def get(self, driver_number: int, session_key: int | None = None) -> Driver | None:
        async def produce() -> Driver | None:
            drivers = await self._request(
                lambda: self._ctx.client.drivers(driver_number=driver_number, session_key=session_key),
                driver_number=driver_number,
                session_key=session_key,
            )
            return drivers[0] if drivers else None

        return await self._cached(keys.driver(driver_number, session_key), produce)
