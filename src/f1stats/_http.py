"""Low-level HTTP transport layer wrapping httpx."""

from __future__ import annotations

from typing import Any

import httpx

from f1stats.exceptions import (
    OpenF1APIError,
    OpenF1ConnectionError,
    OpenF1Error,
    OpenF1TimeoutError,
)

DEFAULT_BASE_URL = "https://api.openf1.org/v1"
DEFAULT_TIMEOUT = 10.0

_NO_RESULTS = "No results found"


def _handle_response(
    response: httpx.Response, endpoint: str, params: list[tuple[str, str]],
) -> list[dict[str, Any]]:
    """Validate response status and return parsed JSON."""
    # OpenF1 answers an empty query with a 404 instead of an empty list
    if response.status_code == 404 and _NO_RESULTS in response.text:
        return []
    if response.status_code >= 400:
        raise OpenF1APIError(
            status_code=response.status_code,
            message=response.text,
            endpoint=endpoint,
            params=params,
        )
    try:
        return response.json()  # type: ignore[no-any-return]
    except ValueError as exc:
        raise OpenF1APIError(
            status_code=response.status_code,
            message=f"Response body is not valid JSON: {exc}",
            endpoint=endpoint,
            params=params,
        ) from exc


class AsyncTransport:
    """Asynchronous HTTP transport using httpx.AsyncClient."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    async def get(self, endpoint: str, params: list[tuple[str, str]]) -> list[dict[str, Any]]:
        """Perform an async GET request and return parsed JSON."""
        try:
            response = await self._client.get(endpoint, params=params)
        except httpx.TimeoutException as exc:
            raise OpenF1TimeoutError(str(exc), endpoint, params) from exc
        except httpx.TransportError as exc:
            raise OpenF1ConnectionError(str(exc), endpoint, params) from exc
        except httpx.HTTPError as exc:
            raise OpenF1Error(str(exc), endpoint, params) from exc
        return _handle_response(response, endpoint, params)

    async def close(self) -> None:
        await self._client.aclose()
