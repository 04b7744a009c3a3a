"""Print a season's championship tables and calendar."""

import asyncio
import sys

from f1stats import F1DataError, SeasonStatsService, describe_error


async def main(year: int) -> None:
    async with SeasonStatsService() as stats:
        try:
            summary = await stats.season_statistics(year)
            standings = await stats.standings(year)
        except F1DataError as exc:
            print(describe_error(exc))
            return

        print(f"=== {year} Season ===")
        print(
            f"  {summary.completed_races} of {summary.total_races} races completed, "
            f"{summary.upcoming_races} to go"
        )
        if standings.is_partial:
            print(f"  Results missing for sessions {list(standings.skipped_sessions)}")

        print("\n=== Drivers ===")
        for s in standings.drivers[:10]:
            print(f"  {s.position:>2}. {s.driver.display_name:<24} {s.points:>4} pts  {s.wins} wins")

        print("\n=== Constructors ===")
        for c in standings.constructors:
            print(f"  {c.position:>2}. {c.name:<24} {c.points:>4} pts")

        print("\n=== Upcoming ===")
        for circuit in await stats.upcoming_circuits(year):
            print(f"  {circuit.date_start:%d %b}  {circuit.location}, {circuit.country_name}")

        cache = stats.cache_stats()
        print(f"\n{cache.total_entries} cached responses (ttl {cache.ttl_seconds:.0f}s)")


if __name__ == "__main__":
    asyncio.run(main(int(sys.argv[1]) if len(sys.argv) > 1 else 2024))
