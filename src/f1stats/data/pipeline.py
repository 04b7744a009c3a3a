"""Dependent lookup chains expressed as an ordered list of named steps."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any

from f1stats.exceptions import F1DataError, LookupChainError, MissingDataError


@dataclass(frozen=True)
class LookupStep:
    """One link of a chain. *run* receives the previous step's output."""

    name: str
    run: Callable[[Any], Awaitable[Any]]


class LookupPipeline:
    """Runs steps in order; any step failure fails the whole chain.

    Every failure surfaces as a single :class:`LookupChainError` naming the step,
    with the step's own error chained as ``__cause__``.
    """

    def __init__(self, resource: str, steps: Sequence[LookupStep]) -> None:
        if not steps:
            raise ValueError("a lookup pipeline needs at least one step")
        self.resource = resource
        self.steps = tuple(steps)

    @property
    def step_names(self) -> tuple[str, ...]:
        return tuple(step.name for step in self.steps)

    async def run(self, initial: Any, **params: Any) -> Any:
        value = initial
        for step in self.steps:
            try:
                value = await step.run(value)
            except F1DataError as exc:
                raise LookupChainError(self.resource, params, step.name, str(exc)) from exc
        return value


def take_last(resource: str, message: str, **params: Any) -> Callable[[Sequence[Any]], Awaitable[Any]]:
    """Step body returning the last item of an ordered list, or raising if empty."""

    async def run(items: Sequence[Any]) -> Any:
        if not items:
            raise MissingDataError(resource, params, message)
        return items[-1]

    return run
