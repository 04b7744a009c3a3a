"""Runtime configuration, overridable through ``F1STATS_*`` environment variables."""

from __future__ import annotations

import functools
from datetime import datetime, timezone
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_POINTS_TABLE: tuple[int, ...] = (25, 18, 15, 12, 10, 8, 6, 4, 2, 1)


def _current_year() -> int:
    return datetime.now(timezone.utc).year


class Settings(BaseSettings):
    """Tunable parameters for the fetch, cache and aggregation layers."""

    model_config = SettingsConfigDict(env_prefix="F1STATS_", frozen=True)

    base_url: str = "https://api.openf1.org/v1"
    request_timeout: float = 10.0
    cache_ttl: float = 15 * 60
    min_request_interval: float = 0.35  # OpenF1 allows 3 req/s
    inter_race_delay: float = 0.4
    default_year: int = Field(default_factory=_current_year)
    points_table: tuple[int, ...] = DEFAULT_POINTS_TABLE
    meetings_limit: int = 25
    sessions_limit: int = 50
    circuit_lookup_limit: int = 50
    log_dir: Path = Path("logs")


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
