"""Meeting (race weekend) fetchers."""

from __future__ import annotations

from f1stats._dates import chronological
from f1stats.api_logging import log_api_call
from f1stats.data import keys
from f1stats.data.base import Fetcher
from f1stats.models.meeting import Meeting


class MeetingFetcher(Fetcher):
    resource = "meetings"

    @log_api_call
    async def recent(self, limit: int | None = None) -> list[Meeting]:
        """Most recent meetings, as returned upstream."""
        limit = limit or self._ctx.settings.meetings_limit

        async def produce() -> list[Meeting]:
            return await self._request(
                lambda: self._ctx.client.meetings(limit=limit), limit=limit,
            )

        return await self._cached(keys.meetings_recent(limit), produce)

    @log_api_call
    async def by_year(self, year: int) -> list[Meeting]:
        """All meetings of a season in calendar order."""

        async def produce() -> list[Meeting]:
            meetings = await self._request(
                lambda: self._ctx.client.meetings(year=year), throttled=True, year=year,
            )
            return chronological(meetings)

        return await self._cached(keys.meetings_year(year), produce)

    @log_api_call
    async def get(self, meeting_key: int) -> Meeting | None:
        async def produce() -> Meeting | None:
            meetings = await self._request(
                lambda: self._ctx.client.meetings(meeting_key=meeting_key),
                meeting_key=meeting_key,
            )
            return meetings[0] if meetings else None

        return await self._cached(keys.meeting(meeting_key), produce)

    @log_api_call
    async def completed(self, year: int) -> list[Meeting]:
        """Meetings of *year* whose first session has already started."""

        async def produce() -> list[Meeting]:
            now = self._now()
            return [m for m in await self.by_year(year) if m.has_started(now)]

        return await self._cached(keys.meetings_completed(year), produce)
