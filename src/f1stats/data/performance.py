"""Lap-performance fetchers: lap times, sectors, speed traps and statistics."""

from __future__ import annotations

import statistics

from f1stats.api_logging import log_api_call
from f1stats.data import keys
from f1stats.data.base import Fetcher
from f1stats.models.lap import Lap
from f1stats.models.lap_stats import LapTimeStats


def fastest_lap_per_driver(laps: list[Lap]) -> list[Lap]:
    """Each driver's quickest timed lap, quickest first."""
    fastest: dict[int | None, Lap] = {}
    for lap in laps:
        if not lap.lap_duration:
            continue
        current = fastest.get(lap.driver_number)
        if current is None or lap.lap_duration < current.lap_duration:  # type: ignore[operator]
            fastest[lap.driver_number] = lap
    return sorted(fastest.values(), key=lambda lap: lap.lap_duration)  # type: ignore[arg-type, return-value]


def compute_lap_time_stats(laps: list[Lap]) -> LapTimeStats:
    """Best, mean and population standard deviation of timed racing laps."""
    durations = [lap.lap_duration for lap in laps if lap.is_timed_racing_lap]
    if not durations:
        return LapTimeStats(total_laps=len(laps))
    return LapTimeStats(
        total_laps=len(laps),
        valid_laps=len(durations),
        best_lap=min(durations),  # type: ignore[type-var]
        average_lap=statistics.mean(durations),  # type: ignore[type-var]
        consistency=statistics.pstdev(durations),  # type: ignore[type-var]
    )


class LapFetcher(Fetcher):
    resource = "laps"

    @log_api_call
    async def lap_times(self, session_key: int, driver_number: int | None = None) -> list[Lap]:
        """Lap-time series of a session, optionally for one driver."""

        async def produce() -> list[Lap]:
            return await self._request(
                lambda: self._ctx.client.laps(session_key=session_key, driver_number=driver_number),
                session_key=session_key,
                driver_number=driver_number,
            )

        return await self._cached(keys.laps(session_key, driver_number), produce)

    @log_api_call
    async def fastest_laps(self, session_key: int) -> list[Lap]:
        async def produce() -> list[Lap]:
            return fastest_lap_per_driver(await self.lap_times(session_key))

        return await self._cached(keys.fastest_laps(session_key), produce)

    @log_api_call
    async def sector_times(self, session_key: int, driver_number: int | None = None) -> list[Lap]:
        """Laps with all three sector durations present."""

        async def produce() -> list[Lap]:
            laps = await self.lap_times(session_key, driver_number)
            return [lap for lap in laps if lap.has_all_sectors]

        return await self._cached(keys.sector_times(session_key, driver_number), produce)

    @log_api_call
    async def speed_data(self, session_key: int, driver_number: int | None = None) -> list[Lap]:
        """Laps with at least one speed trap reading."""

        async def produce() -> list[Lap]:
            laps = await self.lap_times(session_key, driver_number)
            return [lap for lap in laps if lap.has_speed_trap]

        return await self._cached(keys.speed_data(session_key, driver_number), produce)

    @log_api_call
    async def lap_time_stats(self, session_key: int, driver_number: int) -> LapTimeStats:
        async def produce() -> LapTimeStats:
            return compute_lap_time_stats(await self.lap_times(session_key, driver_number))

        return await self._cached(keys.lap_stats(session_key, driver_number), produce)
