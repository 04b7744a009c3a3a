"""Circuit model, derived from meeting records."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class Circuit(BaseModel):
    """A venue observed in a meeting list. OpenF1 has no circuits endpoint.

    Field mapping from :class:`~f1stats.models.meeting.Meeting`: ``circuit_name``
    is the meeting's official name; every other field keeps its meeting name.
    """

    model_config = ConfigDict(frozen=True)

    circuit_key: int
    circuit_short_name: str | None = None
    circuit_name: str | None = None
    country_code: str | None = None
    country_name: str | None = None
    location: str | None = None
    date_start: datetime | None = None
    gmt_offset: str | None = None
    meeting_key: int | None = None
