"""Async client for the OpenF1 endpoints used by the season data layer."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import TypeAdapter

from f1stats._filters import build_query_params
from f1stats._http import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, AsyncTransport
from f1stats.exceptions import OpenF1ValidationError
from f1stats.models.driver import Driver
from f1stats.models.lap import Lap
from f1stats.models.meeting import Meeting
from f1stats.models.position import Position
from f1stats.models.session import Session

T = TypeVar("T")


def _validate_list(
    model_type: type[T], data: list[dict[str, Any]], endpoint: str, params: list[tuple[str, str]],
) -> list[T]:
    """Validate a list of dicts against a Pydantic model."""
    try:
        adapter = TypeAdapter(list[model_type])
        return adapter.validate_python(data)
    except Exception as exc:
        raise OpenF1ValidationError(
            f"Failed to validate {model_type.__name__} response: {exc}", endpoint, params,
        ) from exc


class AsyncOpenF1Client:
    """Asynchronous client for the OpenF1 API.

    Usage:
        async with AsyncOpenF1Client() as f1:
            sessions = await f1.sessions(year=2024)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._transport = AsyncTransport(base_url=base_url, timeout=timeout)

    async def __aenter__(self) -> AsyncOpenF1Client:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP connection."""
        await self._transport.close()

    async def _get(self, endpoint: str, model: type[T], **kwargs: Any) -> list[T]:
        params = build_query_params(**kwargs)
        data = await self._transport.get(endpoint, params)
        return _validate_list(model, data, endpoint, params)

    # ── Endpoints ──────────────────────────────────────────────

    async def drivers(self, **kwargs: Any) -> list[Driver]:
        """Get driver information for a session."""
        return await self._get("/drivers", Driver, **kwargs)

    async def laps(self, **kwargs: Any) -> list[Lap]:
        """Get lap data with sector times and speeds."""
        return await self._get("/laps", Lap, **kwargs)

    async def meetings(self, **kwargs: Any) -> list[Meeting]:
        """Get Grand Prix weekends and test events."""
        return await self._get("/meetings", Meeting, **kwargs)

    async def position(self, **kwargs: Any) -> list[Position]:
        """Get driver position changes throughout a session."""
        return await self._get("/position", Position, **kwargs)

    async def sessions(self, **kwargs: Any) -> list[Session]:
        """Get session information (practice, qualifying, sprint, race)."""
        return await self._get("/sessions", Session, **kwargs)
