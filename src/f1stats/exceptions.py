"""Exceptions raised by the OpenF1 client and the season data layer."""

from __future__ import annotations

from typing import Any


class OpenF1Error(Exception):
    """Base exception for all OpenF1 client errors."""

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        params: list[tuple[str, str]] | None = None,
    ) -> None:
        self.endpoint = endpoint
        self.params = list(params or [])
        super().__init__(message)


class OpenF1ConnectionError(OpenF1Error):
    """Raised when the client cannot connect to the API."""


class OpenF1TimeoutError(OpenF1Error):
    """Raised when a request to the API times out."""


class OpenF1APIError(OpenF1Error):
    """Raised when the API returns an error response (4xx/5xx)."""

    def __init__(
        self,
        status_code: int,
        message: str,
        endpoint: str | None = None,
        params: list[tuple[str, str]] | None = None,
    ) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP {status_code}: {message}", endpoint, params)


class OpenF1ValidationError(OpenF1Error):
    """Raised when API response data fails model validation."""


# ── Data layer ───────────────────────────────────────────────────────────────


class F1DataError(Exception):
    """Base error of the data and service layers. Presentation catches only this."""


class FetchError(F1DataError):
    """An upstream fetch failed for the resource identified by *params*."""

    def __init__(self, resource: str, params: dict[str, Any], reason: str = "") -> None:
        self.resource = resource
        self.params = dict(params)
        self.reason = reason
        detail = ", ".join(f"{k}={v}" for k, v in self.params.items())
        message = f"Failed to fetch {resource}"
        if detail:
            message += f" ({detail})"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class LookupChainError(FetchError):
    """A step of a dependent lookup chain failed; no partial result exists."""

    def __init__(self, resource: str, params: dict[str, Any], step: str, reason: str = "") -> None:
        self.step = step
        super().__init__(resource, params, f"step '{step}' failed: {reason}" if reason else f"step '{step}' failed")


class MissingDataError(F1DataError):
    """Foundational data for a dependent computation does not exist upstream."""

    def __init__(self, resource: str, params: dict[str, Any], message: str) -> None:
        self.resource = resource
        self.params = dict(params)
        super().__init__(message)


def describe_error(exc: BaseException) -> str:
    """Return a single human-readable sentence describing *exc* for end users."""
    if isinstance(exc, MissingDataError):
        return f"{exc}."
    if isinstance(exc, FetchError):
        cause = exc.__cause__
        while isinstance(cause, FetchError) and cause.__cause__ is not None:
            cause = cause.__cause__
        if isinstance(cause, OpenF1TimeoutError):
            return "The OpenF1 service took too long to respond. Please try again shortly."
        if isinstance(cause, OpenF1APIError) and cause.status_code == 429:
            return "The OpenF1 service is rate limiting requests. Please try again shortly."
        if isinstance(cause, OpenF1ConnectionError):
            return "Could not reach the OpenF1 service. Check your connection and try again."
        return f"Could not load {exc.resource} data from OpenF1."
    if isinstance(exc, F1DataError):
        return str(exc)
    return "An unexpected error occurred while loading season data."
