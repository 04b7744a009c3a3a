"""Timezone helpers for comparing OpenF1 timestamps."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Protocol, TypeVar

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class _Scheduled(Protocol):
    @property
    def date_start(self) -> datetime | None: ...


S = TypeVar("S", bound=_Scheduled)


def as_utc(value: datetime | None) -> datetime | None:
    """Return *value* as an aware UTC datetime; naive values are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def chronological(items: Iterable[S]) -> list[S]:
    """Stable sort by ``date_start``; undated items sort first."""
    return sorted(items, key=lambda item: as_utc(item.date_start) or _EPOCH)
