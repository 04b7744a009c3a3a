"""Championship standings models (drivers and constructors)."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from f1stats.models.constructor import Constructor
from f1stats.models.driver import Driver


class DriverStanding(BaseModel):
    """Driver championship standing entry."""

    model_config = ConfigDict(frozen=True)

    position: int
    driver: Driver
    points: int = 0
    wins: int = 0
    podiums: int = 0

    @property
    def driver_number(self) -> int | None:
        return self.driver.driver_number

    @property
    def team_name(self) -> str | None:
        return self.driver.team_name


class ConstructorStanding(BaseModel):
    """Constructor championship standing entry."""

    model_config = ConfigDict(frozen=True)

    position: int
    constructor: Constructor
    points: int = 0
    wins: int = 0
    podiums: int = 0

    @property
    def name(self) -> str:
        return self.constructor.name


class StandingsResult(BaseModel):
    """Ranked tables for one season, computed from completed Grand Prix races."""

    model_config = ConfigDict(frozen=True)

    year: int
    drivers: tuple[DriverStanding, ...]
    constructors: tuple[ConstructorStanding, ...]
    total_races: int
    completed_races: int
    upcoming_races: int
    # Completed races that scored nobody; None marks a race without a session key
    skipped_sessions: tuple[int | None, ...] = ()
    last_updated: datetime

    @property
    def scored_races(self) -> int:
        """Completed races that actually contributed points."""
        return self.completed_races - len(self.skipped_sessions)

    @property
    def is_partial(self) -> bool:
        """True when at least one completed race could not be scored."""
        return bool(self.skipped_sessions)
