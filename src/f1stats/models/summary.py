"""Season statistics model."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from f1stats.models.circuit import Circuit


class SeasonSummary(BaseModel):
    """Denormalized season view for dashboards."""

    model_config = ConfigDict(frozen=True)

    year: int
    total_races: int
    completed_races: int
    upcoming_races: int
    total_drivers: int
    total_constructors: int
    circuits: tuple[Circuit, ...] = ()
    skipped_sessions: tuple[int | None, ...] = ()
    last_updated: datetime

    @property
    def is_partial(self) -> bool:
        return bool(self.skipped_sessions)
