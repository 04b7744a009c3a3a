"""Data layer — cached, rate-limited OpenF1 resource fetchers."""

from __future__ import annotations

from .base import Fetcher
from .drivers import DriverFetcher, unique_drivers
from .meetings import MeetingFetcher
from .performance import LapFetcher, compute_lap_time_stats, fastest_lap_per_driver
from .pipeline import LookupPipeline, LookupStep
from .positions import PositionFetcher, final_classification
from .sessions import SessionFetcher, filter_grand_prix_races

__all__ = [
    "DriverFetcher",
    "Fetcher",
    "LapFetcher",
    "LookupPipeline",
    "LookupStep",
    "MeetingFetcher",
    "PositionFetcher",
    "SessionFetcher",
    "compute_lap_time_stats",
    "fastest_lap_per_driver",
    "filter_grand_prix_races",
    "final_classification",
    "unique_drivers",
]
