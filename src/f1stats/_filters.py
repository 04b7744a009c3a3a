"""Query filter builder for OpenF1 API comparison operators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Filter:
    """Represents a comparison filter for API query parameters.

    Usage:
        Filter(lte="2024-03-02T15:30:00")  # produces: date<=2024-03-02T15:30:00
        Filter(gte=5, lte=10)  # produces: lap_number>=5&lap_number<=10
    """

    gt: int | float | str | None = None
    gte: int | float | str | None = None
    lt: int | float | str | None = None
    lte: int | float | str | None = None

    def to_params(self, key: str) -> list[tuple[str, str]]:
        """Convert this filter to a list of (key_with_operator, value) pairs."""
        params: list[tuple[str, str]] = []
        for operator, value in ((">", self.gt), (">=", self.gte), ("<", self.lt), ("<=", self.lte)):
            if value is not None:
                params.append((f"{key}{operator}", str(value)))
        return params


def build_query_params(**kwargs: Any) -> list[tuple[str, str]]:
    """Build a list of query parameter tuples from keyword arguments.

    Plain values become equality filters, ``Filter`` instances become comparison
    operators and ``None`` values are dropped.
    """
    params: list[tuple[str, str]] = []
    for key, value in kwargs.items():
        if value is None:
            continue
        if isinstance(value, Filter):
            params.extend(value.to_params(key))
        else:
            params.append((key, str(value)))
    return params
