"""Tests for api_logging.py: async decorators and file logging."""

from __future__ import annotations

from pathlib import Path

import pytest

from f1stats.api_logging import get_logger, log_api_call, log_service_call, set_log_dir
from f1stats.config import Settings
from f1stats.context import DataContext


class _FakeFetcher:
    """Minimal class to exercise the logging decorators."""

    @log_api_call
    async def by_year(self, year: int) -> list[dict]:
        return [{"name": "item1"}, {"name": "item2"}]

    @log_api_call
    async def get(self, key: int) -> dict | None:
        return None

    @log_api_call
    async def failing(self, key: int) -> list[dict]:
        raise ValueError("test error")

    @log_service_call
    async def compute(self, year: int, *, fresh: bool = False) -> dict:
        return {"year": year}

    @log_service_call
    async def compute_failing(self) -> None:
        raise RuntimeError("service error")


@pytest.fixture
def fetcher() -> _FakeFetcher:
    return _FakeFetcher()


@pytest.fixture
def log_file(tmp_path: Path) -> Path:
    return tmp_path / "logs" / "api_calls.log"


class TestLogApiCall:
    @pytest.mark.asyncio
    async def test_returns_result(self, fetcher: _FakeFetcher) -> None:
        assert await fetcher.by_year(2024) == [{"name": "item1"}, {"name": "item2"}]

    @pytest.mark.asyncio
    async def test_logs_call_and_ok(self, fetcher: _FakeFetcher, log_file: Path) -> None:
        await fetcher.by_year(2024)
        content = log_file.read_text()
        assert "CALL: _FakeFetcher.by_year(2024)" in content
        assert "OK: _FakeFetcher.by_year(2024) -> 2 items" in content

    @pytest.mark.asyncio
    async def test_single_value_counts_as_one_item(self, fetcher: _FakeFetcher, log_file: Path) -> None:
        await fetcher.get(7)
        assert "OK: _FakeFetcher.get(7) -> 1 items" in log_file.read_text()

    @pytest.mark.asyncio
    async def test_logs_failure_and_reraises(self, fetcher: _FakeFetcher, log_file: Path) -> None:
        with pytest.raises(ValueError, match="test error"):
            await fetcher.failing(123)
        content = log_file.read_text()
        assert "FAIL: _FakeFetcher.failing(123) -> ValueError: test error" in content

    def test_preserves_function_name(self, fetcher: _FakeFetcher) -> None:
        assert fetcher.by_year.__name__ == "by_year"


class TestLogServiceCall:
    @pytest.mark.asyncio
    async def test_logs_service_call(self, fetcher: _FakeFetcher, log_file: Path) -> None:
        assert await fetcher.compute(2024, fresh=True) == {"year": 2024}
        content = log_file.read_text()
        assert "SERVICE CALL: _FakeFetcher.compute(2024, fresh=True)" in content
        assert "SERVICE OK: _FakeFetcher.compute" in content

    @pytest.mark.asyncio
    async def test_logs_service_failure(self, fetcher: _FakeFetcher, log_file: Path) -> None:
        with pytest.raises(RuntimeError, match="service error"):
            await fetcher.compute_failing()
        content = log_file.read_text()
        assert "SERVICE FAIL: _FakeFetcher.compute_failing -> RuntimeError" in content


class TestGetLogger:
    def test_creates_log_directory(self, tmp_path: Path) -> None:
        get_logger().info("hello")
        assert (tmp_path / "logs").is_dir()
        assert "hello" in (tmp_path / "logs" / "api_calls.log").read_text()

    def test_returns_same_logger(self) -> None:
        assert get_logger() is get_logger()

    def test_does_not_propagate(self) -> None:
        logger = get_logger()
        assert logger.name == "f1stats.api"
        assert logger.propagate is False


class TestLogDirectory:
    @pytest.mark.asyncio
    async def test_context_settings_choose_log_dir(self, tmp_path: Path) -> None:
        context = DataContext(settings=Settings(log_dir=tmp_path / "season-logs"))
        get_logger().info("from context")
        await context.close()
        assert "from context" in (tmp_path / "season-logs" / "api_calls.log").read_text()

    def test_set_log_dir_switches_file(self, tmp_path: Path) -> None:
        get_logger().info("first")
        set_log_dir(tmp_path / "other")
        get_logger().info("second")
        assert "second" not in (tmp_path / "logs" / "api_calls.log").read_text()
        assert "second" in (tmp_path / "other" / "api_calls.log").read_text()

    def test_directory_resolved_from_settings_on_first_use(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        import f1stats.api_logging as mod

        monkeypatch.setattr(mod, "_LOG_DIR", None)
        monkeypatch.setattr(mod, "_LOG_FILE", None)
        monkeypatch.setattr(mod, "get_settings", lambda: Settings(log_dir=tmp_path / "lazy"))
        get_logger().info("lazy")
        assert "lazy" in (tmp_path / "lazy" / "api_calls.log").read_text()
