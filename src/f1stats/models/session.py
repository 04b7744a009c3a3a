"""Session model (practice, qualifying, sprint, race)."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from f1stats._dates import as_utc

RACE_SESSION_NAME = "Race"
RACE_SESSION_TYPE = "Race"


class Session(BaseModel):
    """F1 session (practice, qualifying, sprint, race)."""

    model_config = ConfigDict(frozen=True)

    circuit_key: int | None = None
    circuit_short_name: str | None = None
    country_code: str | None = None
    country_key: int | None = None
    country_name: str | None = None
    date_end: datetime | None = None
    date_start: datetime | None = None
    gmt_offset: str | None = None
    location: str | None = None
    meeting_key: int | None = None
    session_key: int | None = None
    session_name: str | None = None
    session_type: str | None = None
    year: int | None = None

    @property
    def is_grand_prix(self) -> bool:
        """Only the main race awards championship points; sprints do not."""
        return self.session_name == RACE_SESSION_NAME and self.session_type == RACE_SESSION_TYPE

    def has_ended(self, now: datetime) -> bool:
        """True when ``date_end`` lies strictly before *now*. Undated sessions never end."""
        end = as_utc(self.date_end)
        return end is not None and end < as_utc(now)  # type: ignore[operator]
