"""Shared constants: levels, metric units, size limits and the default blocklist."""
from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple


class MetricUnit(str, Enum):
    """Units accepted by CloudWatch embedded metrics."""

    Seconds = "Seconds"
    Microseconds = "Microseconds"
    Milliseconds = "Milliseconds"
    Bytes = "Bytes"
    Kilobytes = "Kilobytes"
    Megabytes = "Megabytes"
    Gigabytes = "Gigabytes"
    Terabytes = "Terabytes"
    Bits = "Bits"
    Kilobits = "Kilobits"
    Megabits = "Megabits"
    Gigabits = "Gigabits"
    Terabits = "Terabits"
    Percent = "Percent"
    Count = "Count"
    BytesPerSecond = "Bytes/Second"
    KilobytesPerSecond = "Kilobytes/Second"
    MegabytesPerSecond = "Megabytes/Second"
    GigabytesPerSecond = "Gigabytes/Second"
    TerabytesPerSecond = "Terabytes/Second"
    BitsPerSecond = "Bits/Second"
    KilobitsPerSecond = "Kilobits/Second"
    MegabitsPerSecond = "Megabits/Second"
    GigabitsPerSecond = "Gigabits/Second"
    TerabitsPerSecond = "Terabits/Second"
    CountPerSecond = "Count/Second"
    NoUnit = "None"


LOG_LEVELS: Tuple[str, ...] = ("debug", "info", "warn", "error")
LEVEL_ORDINALS: Dict[str, int] = {level: index for index, level in enumerate(LOG_LEVELS)}

MAX_PAYLOAD_SIZE = 60000
COMPRESS_PAYLOAD_SIZE = 25000
MAX_PAYLOAD_MESSAGE = "Log too large"
INPUT_EVENT_MESSAGE = "Input Event"
RESET_SENSITIVE_MESSAGE = "Sensitive attributes have been reset to defaults"

MASK_MARKER = "****"

DEFAULT_SENSITIVE_ATTRIBUTES: Tuple[str, ...] = (
    "password",
    "userid",
    "token",
    "secret",
    "key",
    "x-api-key",
    "bearer",
    "authorization",
)
