"""Deterministic cache keys, one builder per logical query.

Identical queries must always produce identical keys: the standings and summary
builders rely on shared keys to reuse each other's upstream work.
"""

from __future__ import annotations


def _opt(value: object, default: str) -> str:
    return default if value is None else str(value)


def meetings_recent(limit: int) -> str:
    return f"meetings-recent-{limit}"


def meetings_year(year: int) -> str:
    return f"meetings-year-{year}"


def meeting(meeting_key: int) -> str:
    return f"meeting-{meeting_key}"


def meetings_completed(year: int) -> str:
    return f"completed-meetings-{year}"


def sessions_recent(limit: int) -> str:
    return f"sessions-recent-{limit}"


def sessions_meeting(meeting_key: int) -> str:
    return f"sessions-meeting-{meeting_key}"


def sessions_year(year: int, session_type: str | None = None) -> str:
    return f"sessions-year-{year}-{_opt(session_type, 'all')}"


def race_sessions(year: int) -> str:
    return f"race-sessions-{year}"


def session(session_key: int) -> str:
    return f"session-{session_key}"


def session_latest() -> str:
    return "latest-session"


def drivers_session(session_key: int) -> str:
    return f"drivers-{session_key}"


def drivers_latest() -> str:
    return "drivers-latest"


def drivers_year(year: int) -> str:
    return f"drivers-year-{year}"


def driver(driver_number: int, session_key: int | None = None) -> str:
    return f"driver-{driver_number}-{_opt(session_key, 'latest')}"


def positions(session_key: int) -> str:
    return f"positions-{session_key}"


def positions_driver(session_key: int, driver_number: int) -> str:
    return f"positions-{session_key}-driver-{driver_number}"


def positions_final(session_key: int) -> str:
    return f"final-positions-{session_key}"


def positions_at(session_key: int, timestamp: str) -> str:
    return f"positions-{session_key}-time-{timestamp}"


def laps(session_key: int, driver_number: int | None = None) -> str:
    return f"laps-{session_key}-{_opt(driver_number, 'all')}"


def fastest_laps(session_key: int) -> str:
    return f"fastest-laps-{session_key}"


def sector_times(session_key: int, driver_number: int | None = None) -> str:
    return f"sectors-{session_key}-{_opt(driver_number, 'all')}"


def speed_data(session_key: int, driver_number: int | None = None) -> str:
    return f"speeds-{session_key}-{_opt(driver_number, 'all')}"


def lap_stats(session_key: int, driver_number: int) -> str:
    return f"lap-stats-{session_key}-{driver_number}"


def circuits_recent(limit: int) -> str:
    return f"circuits-recent-{limit}"


def circuits_year(year: int) -> str:
    return f"circuits-year-{year}"


def circuit(circuit_key: int) -> str:
    return f"circuit-{circuit_key}"


def circuits_upcoming(year: int) -> str:
    return f"upcoming-circuits-{year}"


def constructors_year(year: int) -> str:
    return f"constructors-year-{year}"


def standings(year: int) -> str:
    return f"calculated-standings-{year}"


def season_stats(year: int) -> str:
    return f"season-stats-{year}"
