"""API call logging for the season data and service layers."""

from __future__ import annotations

import functools
import logging
import os
import threading
import time
from typing import Any, Callable, TypeVar

from f1stats.config import get_settings

F = TypeVar("F", bound=Callable[..., Any])

_LOG_FILE_NAME = "api_calls.log"

# Resolved from settings on first use unless set_log_dir() ran earlier
_LOG_DIR: str | None = None
_LOG_FILE: str | None = None

_logger: logging.Logger | None = None
_logger_lock = threading.Lock()


def get_logger() -> logging.Logger:
    """Return the file logger, creating log dir and handler on first use."""
    global _logger, _LOG_DIR, _LOG_FILE
    if _logger is not None:
        return _logger

    with _logger_lock:
        if _logger is not None:
            return _logger

        if _LOG_DIR is None:
            _LOG_DIR = str(get_settings().log_dir)
        if _LOG_FILE is None:
            _LOG_FILE = os.path.join(_LOG_DIR, _LOG_FILE_NAME)
        os.makedirs(_LOG_DIR, exist_ok=True)

        _logger = logging.getLogger("f1stats.api")
        _logger.setLevel(logging.DEBUG)
        _logger.propagate = False

        if not _logger.handlers:
            handler = logging.FileHandler(_LOG_FILE, encoding="utf-8")
            handler.setFormatter(
                logging.Formatter("%(asctime)s | %(levelname)s | %(message)s"),
            )
            _logger.addHandler(handler)

    return _logger


def set_log_dir(log_dir: str | os.PathLike[str]) -> None:
    """Send the API log to *log_dir*. The file is reopened on the next log call."""
    global _logger, _LOG_DIR, _LOG_FILE
    target = str(log_dir)
    with _logger_lock:
        if target == _LOG_DIR:
            return
        named_logger = logging.getLogger("f1stats.api")
        for handler in named_logger.handlers[:]:
            handler.close()
            named_logger.removeHandler(handler)
        _LOG_DIR = target
        _LOG_FILE = os.path.join(target, _LOG_FILE_NAME)
        _logger = None


def _describe_args(args: tuple[Any, ...], kwargs: dict[str, Any]) -> str:
    # Skip 'self'
    arg_parts = [repr(a) for a in args[1:]]
    arg_parts += [f"{k}={v!r}" for k, v in kwargs.items()]
    return ", ".join(arg_parts)


def log_api_call(fn: F) -> F:
    """Decorator that logs async data-layer accessor calls to the API log file."""

    @functools.wraps(fn)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        logger = get_logger()
        arg_str = _describe_args(args, kwargs)
        logger.info("CALL: %s(%s)", fn.__qualname__, arg_str)

        start = time.monotonic()
        try:
            result = await fn(*args, **kwargs)
        except Exception as exc:
            elapsed = time.monotonic() - start
            logger.error(
                "FAIL: %s(%s) -> %s: %s (%.3fs)",
                fn.__qualname__, arg_str, type(exc).__name__, exc, elapsed,
            )
            raise
        elapsed = time.monotonic() - start
        count = len(result) if isinstance(result, (list, tuple)) else 1
        logger.info(
            "OK: %s(%s) -> %d items (%.3fs)",
            fn.__qualname__, arg_str, count, elapsed,
        )
        return result

    return wrapper  # type: ignore[return-value]


def log_service_call(fn: F) -> F:
    """Decorator that logs async service-layer operations to the API log file."""

    @functools.wraps(fn)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        logger = get_logger()
        logger.info("SERVICE CALL: %s(%s)", fn.__qualname__, _describe_args(args, kwargs))

        start = time.monotonic()
        try:
            result = await fn(*args, **kwargs)
        except Exception as exc:
            elapsed = time.monotonic() - start
            logger.error(
                "SERVICE FAIL: %s -> %s: %s (%.3fs)",
                fn.__qualname__, type(exc).__name__, exc, elapsed,
            )
            raise
        elapsed = time.monotonic() - start
        logger.info("SERVICE OK: %s -> %.3fs", fn.__qualname__, elapsed)
        return result

    return wrapper  # type: ignore[return-value]
