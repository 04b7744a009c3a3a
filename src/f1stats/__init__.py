"""f1stats — Season standings and statistics derived from the OpenF1 API."""

from f1stats._filters import Filter
from f1stats.cache import ResponseCache
from f1stats.client import AsyncOpenF1Client
from f1stats.config import Settings, get_settings
from f1stats.context import DataContext
from f1stats.exceptions import (
    F1DataError,
    FetchError,
    LookupChainError,
    MissingDataError,
    OpenF1APIError,
    OpenF1ConnectionError,
    OpenF1Error,
    OpenF1TimeoutError,
    OpenF1ValidationError,
    describe_error,
)
from f1stats.ratelimit import RateLimiter
from f1stats.service import SeasonStatsService
from f1stats.standings import StandingsAggregator, points_for_rank
from f1stats.summary import SeasonSummaryBuilder

__all__ = [
    "AsyncOpenF1Client",
    "DataContext",
    "F1DataError",
    "FetchError",
    "Filter",
    "LookupChainError",
    "MissingDataError",
    "OpenF1APIError",
    "OpenF1ConnectionError",
    "OpenF1Error",
    "OpenF1TimeoutError",
    "OpenF1ValidationError",
    "RateLimiter",
    "ResponseCache",
    "SeasonStatsService",
    "SeasonSummaryBuilder",
    "Settings",
    "StandingsAggregator",
    "describe_error",
    "get_settings",
    "points_for_rank",
]

__version__ = "0.1.0"
