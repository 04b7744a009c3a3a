"""Season data models: upstream OpenF1 records and derived views."""

from f1stats.models.circuit import Circuit
from f1stats.models.constructor import Constructor
from f1stats.models.driver import Driver
from f1stats.models.lap import Lap
from f1stats.models.lap_stats import LapTimeStats
from f1stats.models.meeting import Meeting
from f1stats.models.position import Position
from f1stats.models.session import Session
from f1stats.models.standings import ConstructorStanding, DriverStanding, StandingsResult
from f1stats.models.summary import SeasonSummary

__all__ = [
    "Circuit",
    "Constructor",
    "ConstructorStanding",
    "Driver",
    "DriverStanding",
    "Lap",
    "LapTimeStats",
    "Meeting",
    "Position",
    "SeasonSummary",
    "Session",
    "StandingsResult",
]
