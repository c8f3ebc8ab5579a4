"""Structured, masked, size-bounded JSON logging for serverless functions."""
from __future__ import annotations

from .config import LoggerSettings, get_settings
from .constants import MAX_PAYLOAD_MESSAGE, MetricUnit
from .context import LogContextState
from .logger import Logger
from .masking import CircularReferenceError
from .schemas import MetricMeta
from .sinks import ConsoleSink, Sink

__all__ = [
    "CircularReferenceError",
    "ConsoleSink",
    "LogContextState",
    "Logger",
    "LoggerSettings",
    "MAX_PAYLOAD_MESSAGE",
    "MetricMeta",
    "MetricUnit",
    "Sink",
    "get_settings",
]
