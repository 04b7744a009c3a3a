"""Shared test fixtures, sample API payloads and an in-memory OpenF1 fake."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterator
from datetime import datetime, timezone
from typing import Any

import httpx
import pytest
import respx

from f1stats.cache import ResponseCache
from f1stats.config import Settings
from f1stats.context import DataContext
from f1stats.ratelimit import RateLimiter

BASE_URL = "https://api.openf1.org/v1"

# Fixed "now": after the Bahrain and Saudi races, before Australia
NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


SAMPLE_DRIVER = {
    "broadcast_name": "M VERSTAPPEN",
    "country_code": "NED",
    "driver_number": 1,
    "first_name": "Max",
    "full_name": "Max VERSTAPPEN",
    "headshot_url": "https://example.com/ver.png",
    "last_name": "Verstappen",
    "meeting_key": 1229,
    "name_acronym": "VER",
    "session_key": 9472,
    "team_colour": "3671C6",
    "team_name": "Red Bull Racing",
}

SAMPLE_SESSION = {
    "circuit_key": 63,
    "circuit_short_name": "Sakhir",
    "country_code": "BRN",
    "country_key": 36,
    "country_name": "Bahrain",
    "date_end": "2024-03-02T17:00:00+00:00",
    "date_start": "2024-03-02T15:00:00+00:00",
    "gmt_offset": "03:00:00",
    "location": "Sakhir",
    "meeting_key": 1229,
    "session_key": 9472,
    "session_name": "Race",
    "session_type": "Race",
    "year": 2024,
}

SAMPLE_MEETING = {
    "circuit_key": 63,
    "circuit_short_name": "Sakhir",
    "country_code": "BRN",
    "country_key": 36,
    "country_name": "Bahrain",
    "date_start": "2024-02-29T11:30:00+00:00",
    "gmt_offset": "03:00:00",
    "location": "Sakhir",
    "meeting_key": 1229,
    "meeting_name": "Bahrain Grand Prix",
    "meeting_official_name": "FORMULA 1 GULF AIR BAHRAIN GRAND PRIX 2024",
    "year": 2024,
}

SAMPLE_LAP = {
    "date_start": "2024-03-02T15:10:00",
    "driver_number": 1,
    "duration_sector_1": 28.5,
    "duration_sector_2": 35.2,
    "duration_sector_3": 30.1,
    "i1_speed": 305.0,
    "i2_speed": 280.0,
    "is_pit_out_lap": False,
    "lap_duration": 93.8,
    "lap_number": 5,
    "meeting_key": 1229,
    "segments_sector_1": [2048, 2049, 2051],
    "segments_sector_2": [2048, 2049],
    "segments_sector_3": [2048, 2049, 2050],
    "session_key": 9472,
    "st_speed": 310.0,
}

SAMPLE_POSITION = {
    "date": "2024-03-02T16:59:00+00:00",
    "driver_number": 1,
    "meeting_key": 1229,
    "position": 1,
    "session_key": 9472,
}


# ── Record factories ─────────────────────────────────────────────────────────


def make_meeting(meeting_key: int, circuit_key: int, date_start: str, **extra: Any) -> dict:
    return {
        **SAMPLE_MEETING,
        "meeting_key": meeting_key,
        "circuit_key": circuit_key,
        "date_start": date_start,
        **extra,
    }


def make_session(
    session_key: int,
    meeting_key: int,
    date_start: str,
    date_end: str,
    session_name: str = "Race",
    session_type: str = "Race",
    **extra: Any,
) -> dict:
    return {
        **SAMPLE_SESSION,
        "session_key": session_key,
        "meeting_key": meeting_key,
        "date_start": date_start,
        "date_end": date_end,
        "session_name": session_name,
        "session_type": session_type,
        **extra,
    }


def make_driver(driver_number: int, acronym: str, team_name: str, team_colour: str, **extra: Any) -> dict:
    return {
        **SAMPLE_DRIVER,
        "driver_number": driver_number,
        "name_acronym": acronym,
        "full_name": acronym,
        "team_name": team_name,
        "team_colour": team_colour,
        **extra,
    }


def make_position(driver_number: int, position: int, date: str | None = None, session_key: int = 9472) -> dict:
    return {
        **SAMPLE_POSITION,
        "driver_number": driver_number,
        "position": position,
        "date": date,
        "session_key": session_key,
    }


def make_lap(driver_number: int, lap_number: int, lap_duration: float | None, **extra: Any) -> dict:
    return {
        **SAMPLE_LAP,
        "driver_number": driver_number,
        "lap_number": lap_number,
        "lap_duration": lap_duration,
        **extra,
    }


# ── 2024 season slice: Bahrain, Saudi Arabia (with a sprint), Australia ──────

SEASON_MEETINGS = [
    make_meeting(1230, 149, "2024-03-07T13:30:00+00:00", location="Jeddah"),
    make_meeting(1229, 63, "2024-02-29T11:30:00+00:00", location="Sakhir"),
    make_meeting(1231, 10, "2024-03-22T01:30:00+00:00", location="Melbourne"),
]

SEASON_SESSIONS = [
    make_session(9465, 1229, "2024-02-29T11:30:00+00:00", "2024-02-29T12:30:00+00:00", "Practice 1", "Practice"),
    make_session(9472, 1229, "2024-03-02T15:00:00+00:00", "2024-03-02T17:00:00+00:00", location="Sakhir"),
    make_session(9478, 1230, "2024-03-08T13:00:00+00:00", "2024-03-08T14:00:00+00:00", "Sprint", "Race"),
    make_session(9480, 1230, "2024-03-09T17:00:00+00:00", "2024-03-09T19:00:00+00:00", location="Jeddah"),
    make_session(9488, 1231, "2024-03-24T04:00:00+00:00", "2024-03-24T06:00:00+00:00", location="Melbourne"),
]

LAST_MEETING_SESSIONS = [
    make_session(9488, 1231, "2024-03-24T04:00:00+00:00", "2024-03-24T06:00:00+00:00"),
    make_session(9486, 1231, "2024-03-22T01:30:00+00:00", "2024-03-22T02:30:00+00:00", "Practice 1", "Practice"),
    make_session(9487, 1231, "2024-03-23T05:00:00+00:00", "2024-03-23T06:00:00+00:00", "Qualifying", "Qualifying"),
]

ROSTER = [
    make_driver(1, "VER", "Red Bull Racing", "3671C6"),
    make_driver(11, "PER", "Red Bull Racing", "3671C6"),
    make_driver(16, "LEC", "Ferrari", "E8002D"),
    make_driver(55, "SAI", "Ferrari", "E8002D"),
    make_driver(4, "NOR", "McLaren", "FF8000"),
]

BAHRAIN_POSITIONS = [
    # Starting order, superseded by the later entries
    make_position(16, 1, "2024-03-02T15:03:00+00:00"),
    make_position(1, 2, "2024-03-02T15:03:00+00:00"),
    make_position(1, 1, "2024-03-02T16:59:00+00:00"),
    make_position(11, 2, "2024-03-02T16:59:00+00:00"),
    make_position(55, 3, "2024-03-02T16:59:00+00:00"),
    make_position(16, 4, "2024-03-02T16:59:00+00:00"),
    make_position(4, 5, "2024-03-02T16:59:00+00:00"),
]

JEDDAH_POSITIONS = [
    make_position(1, 1, "2024-03-09T18:59:00+00:00", 9480),
    make_position(11, 2, "2024-03-09T18:59:00+00:00", 9480),
    make_position(16, 3, "2024-03-09T18:59:00+00:00", 9480),
    make_position(4, 4, "2024-03-09T18:59:00+00:00", 9480),
    make_position(55, 0, "2024-03-09T18:59:00+00:00", 9480),
]


# ── Fakes ────────────────────────────────────────────────────────────────────


class FakeClock:
    """Monotonic clock whose sleep advances time instantly."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
        await asyncio.sleep(0)


class FakeOpenF1:
    """Answers OpenF1 GETs from a table keyed by endpoint and exact query params.

    Unknown queries get an empty list. A value that is an int is sent as that
    HTTP status code with an error body; a str is sent as a 200 text body.
    """

    def __init__(self) -> None:
        self.responses: dict[tuple[str, tuple[tuple[str, str], ...]], Any] = {}
        self.calls: list[tuple[str, tuple[tuple[str, str], ...]]] = []

    @staticmethod
    def _key(endpoint: str, params: dict[str, Any]) -> tuple[str, tuple[tuple[str, str], ...]]:
        return endpoint, tuple(sorted((k, str(v)) for k, v in params.items()))

    def add(self, endpoint: str, payload: Any, **params: Any) -> None:
        self.responses[self._key(endpoint, params)] = payload

    def count(self, endpoint: str, **params: Any) -> int:
        return self.calls.count(self._key(endpoint, params))

    def handle(self, request: httpx.Request) -> httpx.Response:
        endpoint = request.url.path.rsplit("/", 1)[-1]
        key = (endpoint, tuple(sorted(request.url.params.multi_items())))
        self.calls.append(key)
        payload = self.responses.get(key, [])
        if isinstance(payload, int):
            return httpx.Response(payload, text="upstream error")
        if isinstance(payload, str):
            return httpx.Response(200, text=payload)
        return httpx.Response(200, json=payload)


def install_season(api: FakeOpenF1) -> None:
    """Register the 2024 season slice on *api*."""
    api.add("meetings", SEASON_MEETINGS, year=2024)
    api.add("sessions", SEASON_SESSIONS, year=2024)
    api.add("sessions", LAST_MEETING_SESSIONS, meeting_key=1231)
    api.add("drivers", ROSTER, session_key=9488)
    api.add("position", BAHRAIN_POSITIONS, session_key=9472)
    api.add("position", JEDDAH_POSITIONS, session_key=9480)


# ── Fixtures ─────────────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _isolated_api_log(tmp_path) -> Iterator[None]:
    """Send the API call log to tmp_path and reset the cached logger."""
    import f1stats.api_logging as mod

    old_logger, old_dir, old_file = mod._logger, mod._LOG_DIR, mod._LOG_FILE
    named_logger = logging.getLogger("f1stats.api")
    named_logger.handlers.clear()

    mod._logger = None
    mod._LOG_DIR = str(tmp_path / "logs")
    mod._LOG_FILE = str(tmp_path / "logs" / "api_calls.log")

    yield

    for h in named_logger.handlers[:]:
        h.close()
        named_logger.removeHandler(h)
    mod._logger, mod._LOG_DIR, mod._LOG_FILE = old_logger, old_dir, old_file


@pytest.fixture
def base_url() -> str:
    return BASE_URL


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(default_year=2024, log_dir=tmp_path / "logs")


@pytest.fixture
def context(settings: Settings, clock: FakeClock) -> DataContext:
    return DataContext(
        settings=settings,
        cache=ResponseCache(ttl=settings.cache_ttl, clock=clock),
        limiter=RateLimiter(settings.min_request_interval, clock=clock, sleep=clock.sleep),
    )


@pytest.fixture
def fake_api() -> Iterator[FakeOpenF1]:
    api = FakeOpenF1()
    with respx.mock(assert_all_called=False) as router:
        router.route(host="api.openf1.org").mock(side_effect=api.handle)
        yield api


@pytest.fixture
def season_api(fake_api: FakeOpenF1) -> FakeOpenF1:
    install_season(fake_api)
    return fake_api


@pytest.fixture
def now() -> datetime:
    return NOW
