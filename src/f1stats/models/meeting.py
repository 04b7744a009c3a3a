"""Meeting (Grand Prix weekend) model."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from f1stats._dates import as_utc


class Meeting(BaseModel):
    """Grand Prix weekend or test event."""

    model_config = ConfigDict(frozen=True)

    circuit_key: int | None = None
    circuit_short_name: str | None = None
    country_code: str | None = None
    country_key: int | None = None
    country_name: str | None = None
    date_start: datetime | None = None
    gmt_offset: str | None = None
    location: str | None = None
    meeting_key: int | None = None
    meeting_name: str | None = None
    meeting_official_name: str | None = None
    year: int | None = None

    def has_started(self, now: datetime) -> bool:
        """True when the weekend's first session began before *now*."""
        start = as_utc(self.date_start)
        return start is not None and start < as_utc(now)  # type: ignore[operator]
