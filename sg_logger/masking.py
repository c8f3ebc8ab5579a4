"""Sensitive-field masking and JSON serialization for log payloads."""
from __future__ import annotations

import math
from datetime import date, datetime, time
from enum import Enum
from typing import AbstractSet, Any, Callable, Iterable, List, Mapping, Optional, Set

import ujson
from pydantic import BaseModel

from .constants import MASK_MARKER


class CircularReferenceError(ValueError):
    """Raised when a payload contains itself."""


class _Omit:
    """Marker for values that are dropped from the output entirely."""

    _instance: Optional["_Omit"] = None

    def __new__(cls) -> "_Omit":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "OMIT"


OMIT = _Omit()


def normalize_keys(keys: Optional[Iterable[Any]]) -> Set[str]:
    """Lowercase the string entries of ``keys``; anything else is ignored."""
    if keys is None or isinstance(keys, (str, bytes)):
        return set()
    try:
        return {key.lower() for key in keys if isinstance(key, str)}
    except TypeError:
        return set()


def to_json(value: Any) -> str:
    return ujson.dumps(value, ensure_ascii=False, escape_forward_slashes=False)


def parse_json_string(value: str) -> Any:
    """Return the decoded value of ``value``, or OMIT if it is not JSON."""
    try:
        return ujson.loads(value)
    except (ValueError, TypeError, OverflowError):
        return OMIT


def mask(value: Any, sensitive_keys: AbstractSet[str], enabled: bool = True) -> Any:
    """Return a JSON-compatible copy of ``value`` with sensitive entries redacted.

    Dict entries whose lowercased key is in ``sensitive_keys`` are replaced by
    the mask marker. ``None`` values and empty dicts are dropped from dicts
    (bottom-up, so a dict emptied by pruning disappears too) and become
    ``null`` inside lists. Strings holding valid JSON are decoded, masked and
    re-encoded. With ``enabled`` false only the pruning is applied.

    Returns ``OMIT`` if the whole value prunes away.
    """
    return _mask_value(value, sensitive_keys, enabled, set())


def _mask_value(value: Any, keys: AbstractSet[str], enabled: bool, active: Set[int]) -> Any:
    value = _coerce(value)
    if value is None:
        return OMIT
    if isinstance(value, dict):
        if not value:
            return OMIT
        return _guarded(value, active, lambda: _mask_dict(value, keys, enabled, active))
    if isinstance(value, list):
        return _guarded(value, active, lambda: _mask_list(value, keys, enabled, active))
    if enabled and isinstance(value, str):
        return _mask_json_string(value, keys, enabled)
    return value


def _mask_dict(value: Mapping[Any, Any], keys: AbstractSet[str], enabled: bool, active: Set[int]) -> Any:
    result = {}
    for raw_key, item in value.items():
        key = raw_key if isinstance(raw_key, str) else str(raw_key)
        item = _coerce(item)
        if item is None or (isinstance(item, dict) and not item):
            continue
        if enabled and key.lower() in keys:
            result[key] = MASK_MARKER
            continue
        masked = _mask_value(item, keys, enabled, active)
        if masked is OMIT:
            continue
        result[key] = masked
    return result if result else OMIT


def _mask_list(value: List[Any], keys: AbstractSet[str], enabled: bool, active: Set[int]) -> List[Any]:
    result = []
    for item in value:
        masked = _mask_value(item, keys, enabled, active)
        result.append(None if masked is OMIT else masked)
    return result


def _mask_json_string(value: str, keys: AbstractSet[str], enabled: bool) -> str:
    decoded = parse_json_string(value)
    if decoded is OMIT:
        return value
    masked = _mask_value(decoded, keys, enabled, set())
    if masked is OMIT:
        return value
    return to_json(masked)


def _guarded(container: Any, active: Set[int], walk: Callable[[], Any]) -> Any:
    marker = id(container)
    if marker in active:
        raise CircularReferenceError(f"circular reference to {type(container).__name__}")
    active.add(marker)
    try:
        return walk()
    finally:
        active.discard(marker)


def _coerce(value: Any) -> Any:
    """Map a Python value onto the closest JSON type."""
    if value is None or isinstance(value, (str, bool, int, dict, list)):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, Enum):
        return _coerce(value.value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, (tuple, set, frozenset)):
        return list(value)
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)
