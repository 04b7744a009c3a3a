"""Tests for dependent lookup chains."""

from __future__ import annotations

import pytest

from f1stats.data.pipeline import LookupPipeline, LookupStep, take_last
from f1stats.exceptions import FetchError, LookupChainError, MissingDataError


async def _double(value: int) -> int:
    return value * 2


async def _listify(value: int) -> list[int]:
    return list(range(value))


async def _fail_fetch(value: object) -> object:
    raise FetchError("sessions", {"meeting_key": 1}, "HTTP 500: boom")


class TestLookupPipeline:
    @pytest.mark.asyncio
    async def test_threads_values_through_steps(self) -> None:
        pipeline = LookupPipeline(
            "numbers",
            [LookupStep("double", _double), LookupStep("range", _listify), LookupStep("last", take_last("n", "empty"))],
        )
        assert await pipeline.run(3) == 5

    @pytest.mark.asyncio
    async def test_failure_names_step_and_chains_cause(self) -> None:
        pipeline = LookupPipeline("drivers", [LookupStep("double", _double), LookupStep("sessions", _fail_fetch)])
        with pytest.raises(LookupChainError) as exc_info:
            await pipeline.run(1, year=2024)
        err = exc_info.value
        assert err.step == "sessions"
        assert err.resource == "drivers"
        assert err.params == {"year": 2024}
        assert isinstance(err.__cause__, FetchError)
        assert "step 'sessions' failed" in str(err)

    @pytest.mark.asyncio
    async def test_later_steps_do_not_run_after_failure(self) -> None:
        ran: list[str] = []

        async def record(value: object) -> object:
            ran.append("after")
            return value

        pipeline = LookupPipeline(
            "drivers",
            [LookupStep("latest", take_last("meetings", "No meetings")), LookupStep("after", record)],
        )
        with pytest.raises(LookupChainError) as exc_info:
            await pipeline.run([])
        assert ran == []
        assert isinstance(exc_info.value.__cause__, MissingDataError)

    @pytest.mark.asyncio
    async def test_non_data_errors_propagate_unwrapped(self) -> None:
        async def broken(value: object) -> object:
            raise KeyError("bug")

        pipeline = LookupPipeline("drivers", [LookupStep("broken", broken)])
        with pytest.raises(KeyError):
            await pipeline.run(None)

    def test_requires_steps(self) -> None:
        with pytest.raises(ValueError):
            LookupPipeline("drivers", [])

    def test_step_names(self) -> None:
        pipeline = LookupPipeline("x", [LookupStep("a", _double), LookupStep("b", _double)])
        assert pipeline.step_names == ("a", "b")


class TestTakeLast:
    @pytest.mark.asyncio
    async def test_returns_last_item(self) -> None:
        assert await take_last("meetings", "none")([1, 2, 3]) == 3

    @pytest.mark.asyncio
    async def test_empty_raises_missing_data(self) -> None:
        with pytest.raises(MissingDataError, match="No meetings found for year 2030") as exc_info:
            await take_last("meetings", "No meetings found for year 2030", year=2030)([])
        assert exc_info.value.params == {"year": 2030}
