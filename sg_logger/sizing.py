"""Size gating for log payloads: pass through, compress, or drop."""
from __future__ import annotations

import base64
import gzip
from dataclasses import dataclass
from typing import Any, Optional

from .config import LoggerSettings
from .constants import MAX_PAYLOAD_MESSAGE
from .masking import OMIT, to_json


@dataclass(frozen=True)
class Oversize:
    size: int
    limit: int

    def as_payload(self) -> dict:
        return {"size": self.size, "limit": self.limit}


@dataclass(frozen=True)
class SizedPayload:
    """Outcome of size gating. ``payload`` is OMIT when nothing is emitted."""

    payload: Any = OMIT
    gzip: bool = False
    oversize: Optional[Oversize] = None


def is_oversize_notice(level: str, message: str) -> bool:
    return level == "warn" and message == MAX_PAYLOAD_MESSAGE


def compress(serialized: str) -> str:
    return base64.b64encode(gzip.compress(serialized.encode("utf-8"))).decode("ascii")


def decompress(encoded: str) -> str:
    return gzip.decompress(base64.b64decode(encoded)).decode("utf-8")


def size_payload(level: str, message: str, payload: Any, settings: LoggerSettings) -> SizedPayload:
    """Decide how ``payload`` (already masked) is carried in the record.

    Thresholds compare the UTF-8 byte length of the serialized payload and are
    strict: a payload exactly at a limit is not acted on.
    """
    if payload is OMIT or is_oversize_notice(level, message):
        return SizedPayload(payload=payload)
    try:
        serialized = to_json(payload)
    except Exception:
        return SizedPayload()

    size = len(serialized.encode("utf-8"))
    if size > settings.max_size and settings.drop_enabled:
        return SizedPayload(oversize=Oversize(size=size, limit=settings.max_size))
    if size > settings.compress_size and settings.compress_enabled:
        return SizedPayload(payload=compress(serialized), gzip=True)
    return SizedPayload(payload=payload)
