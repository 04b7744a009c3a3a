"""Lap-time statistics model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class LapTimeStats(BaseModel):
    """Summary of a driver's timed racing laps in one session, in seconds."""

    model_config = ConfigDict(frozen=True)

    total_laps: int = 0
    valid_laps: int = 0
    best_lap: float | None = None
    average_lap: float | None = None
    consistency: float | None = None
