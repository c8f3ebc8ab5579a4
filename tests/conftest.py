from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Tuple

import pytest

from sg_logger import Logger, LoggerSettings, get_settings

ENV_VARS = (
    "SG_LOGGER_LOG_EVENT",
    "SG_LOGGER_MASK",
    "SG_LOGGER_MAX_SIZE",
    "SG_LOGGER_COMPRESS_SIZE",
    "SG_LOGGER_NO_COMPRESS",
    "SG_LOGGER_NO_SKIP",
    "SG_LOGGER_LOG_TS",
    "SG_LOGGER_LOG_LEVEL",
    "AWS_LAMBDA_LOG_LEVEL",
)


class MemorySink:
    """Collects written lines as ``(method, line)`` pairs."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, str]] = []

    def debug(self, line: str) -> None:
        self.calls.append(("debug", line))

    def info(self, line: str) -> None:
        self.calls.append(("info", line))

    def warn(self, line: str) -> None:
        self.calls.append(("warn", line))

    def error(self, line: str) -> None:
        self.calls.append(("error", line))

    def log(self, line: str) -> None:
        self.calls.append(("log", line))

    def lines(self, method: Optional[str] = None) -> List[str]:
        return [line for name, line in self.calls if method is None or name == method]

    def records(self, method: Optional[str] = None) -> List[Dict[str, Any]]:
        return [json.loads(line) for line in self.lines(method)]


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sink() -> MemorySink:
    return MemorySink()


@pytest.fixture
def make_logger(sink):
    """Build a logger writing to the memory sink, debug level unless overridden."""

    def factory(correlation_id: Optional[str] = "testId", **overrides: Any) -> Logger:
        options = {key: overrides.pop(key) for key in list(overrides) if key.endswith("_attributes") or key == "on_error"}
        overrides.setdefault("log_level", "debug")
        settings = LoggerSettings(**overrides)
        return Logger("testService", "testApp", correlation_id=correlation_id, settings=settings, sink=sink, **options)

    return factory
