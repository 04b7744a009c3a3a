"""Position fetchers and final race classification."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from f1stats._dates import as_utc
from f1stats._filters import Filter
from f1stats.api_logging import log_api_call
from f1stats.data import keys
from f1stats.data.base import Fetcher
from f1stats.models.position import Position


def final_classification(positions: Iterable[Position]) -> list[Position]:
    """Reduce a position feed to one finishing entry per driver, best first.

    Unclassified entries (``position <= 0``) are discarded, then the latest entry
    of each driver is kept. Entries without a timestamp count as later than the
    ones before them in the feed. The sort is stable on position.
    """
    latest: dict[int, Position] = {}
    for entry in positions:
        if entry.driver_number is None or not entry.is_classified:
            continue
        current = latest.get(entry.driver_number)
        if current is None or _not_earlier(entry.date, current.date):
            latest[entry.driver_number] = entry
    return sorted(latest.values(), key=lambda p: p.position)  # type: ignore[arg-type, return-value]


def _not_earlier(candidate: datetime | None, current: datetime | None) -> bool:
    if candidate is None or current is None:
        return True
    return as_utc(candidate) >= as_utc(current)  # type: ignore[operator]


class PositionFetcher(Fetcher):
    resource = "positions"

    @log_api_call
    async def for_session(self, session_key: int) -> list[Position]:
        """The full position feed of a session."""

        async def produce() -> list[Position]:
            return await self._request(
                lambda: self._ctx.client.position(session_key=session_key),
                session_key=session_key,
            )

        return await self._cached(keys.positions(session_key), produce)

    @log_api_call
    async def for_driver(self, session_key: int, driver_number: int) -> list[Position]:
        async def produce() -> list[Position]:
            return await self._request(
                lambda: self._ctx.client.position(
                    session_key=session_key, driver_number=driver_number,
                ),
                session_key=session_key,
                driver_number=driver_number,
            )

        return await self._cached(keys.positions_driver(session_key, driver_number), produce)

    @log_api_call
    async def final(self, session_key: int) -> list[Position]:
        """Final classification of a session, sorted by position ascending."""

        async def produce() -> list[Position]:
            return final_classification(await self.for_session(session_key))

        return await self._cached(keys.positions_final(session_key), produce)

    @log_api_call
    async def at_time(self, session_key: int, timestamp: str) -> list[Position]:
        """Position updates recorded at or before *timestamp* (ISO 8601)."""

        async def produce() -> list[Position]:
            return await self._request(
                lambda: self._ctx.client.position(
                    session_key=session_key, date=Filter(lte=timestamp),
                ),
                session_key=session_key,
                date=timestamp,
            )

        return await self._cached(keys.positions_at(session_key, timestamp), produce)
