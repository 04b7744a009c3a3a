"""Session fetchers, including the Grand Prix race policy."""

from __future__ import annotations

from f1stats._dates import chronological
from f1stats.api_logging import log_api_call
from f1stats.data import keys
from f1stats.data.base import Fetcher
from f1stats.models.session import Session


def filter_grand_prix_races(sessions: list[Session]) -> list[Session]:
    """Keep only ``("Race", "Race")`` sessions. Sprints, practice and qualifying are dropped."""
    return [s for s in sessions if s.is_grand_prix]


class SessionFetcher(Fetcher):
    resource = "sessions"

    @log_api_call
    async def recent(self, limit: int | None = None) -> list[Session]:
        limit = limit or self._ctx.settings.sessions_limit

        async def produce() -> list[Session]:
            return await self._request(
                lambda: self._ctx.client.sessions(limit=limit), limit=limit,
            )

        return await self._cached(keys.sessions_recent(limit), produce)

    @log_api_call
    async def by_meeting(self, meeting_key: int) -> list[Session]:
        """Sessions of one race weekend in chronological order."""

        async def produce() -> list[Session]:
            sessions = await self._request(
                lambda: self._ctx.client.sessions(meeting_key=meeting_key),
                throttled=True,
                meeting_key=meeting_key,
            )
            return chronological(sessions)

        return await self._cached(keys.sessions_meeting(meeting_key), produce)

    @log_api_call
    async def by_year(self, year: int, session_type: str | None = None) -> list[Session]:
        """Sessions of a season in chronological order, optionally of one type."""
        if session_type is not None:

            async def produce_filtered() -> list[Session]:
                sessions = await self.by_year(year)
                return [s for s in sessions if s.session_type == session_type]

            return await self._cached(keys.sessions_year(year, session_type), produce_filtered)

        async def produce() -> list[Session]:
            sessions = await self._request(
                lambda: self._ctx.client.sessions(year=year), throttled=True, year=year,
            )
            return chronological(sessions)

        return await self._cached(keys.sessions_year(year), produce)

    @log_api_call
    async def races_by_year(self, year: int) -> list[Session]:
        """Grand Prix race sessions of a season in chronological order."""

        async def produce() -> list[Session]:
            return filter_grand_prix_races(await self.by_year(year))

        return await self._cached(keys.race_sessions(year), produce)

    @log_api_call
    async def latest(self) -> Session | None:
        async def produce() -> Session | None:
            sessions = await self._request(lambda: self._ctx.client.sessions(limit=1), limit=1)
            return sessions[0] if sessions else None

        return await self._cached(keys.session_latest(), produce)

    @log_api_call
    async def get(self, session_key: int) -> Session | None:
        async def produce() -> Session | None:
            sessions = await self._request(
                lambda: self._ctx.client.sessions(session_key=session_key),
                session_key=session_key,
            )
            return sessions[0] if sessions else None

        return await self._cached(keys.session(session_key), produce)
