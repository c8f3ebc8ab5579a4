"""Pydantic models for emitted log lines and embedded metric blocks."""
from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from .constants import MetricUnit


class LogRecord(BaseModel):
    """One log line. Field order is the order keys appear in the output."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    timestamp: Optional[int] = None
    level: str
    service: str
    correlation_id: str = Field(alias="correlationId")
    message: str
    context: Optional[Dict[str, Any]] = None
    payload: Any = None
    error: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class MetricMeta(BaseModel):
    name: Optional[str] = None
    value: Any = None
    # Names outside MetricUnit pass through; CloudWatch validates them.
    unit: Optional[Union[MetricUnit, str]] = None
    dimensions: List[Tuple[str, Any]] = Field(default_factory=list)

    @property
    def numeric_value(self) -> Any:
        if isinstance(self.value, bool):
            return 1
        if isinstance(self.value, int):
            return self.value
        if isinstance(self.value, float) and math.isfinite(self.value):
            return self.value
        return 1

    @property
    def resolved_unit(self) -> Union[MetricUnit, str]:
        if self.name == "Duration":
            return MetricUnit.Milliseconds
        return self.unit or MetricUnit.Count


class MetricDefinition(BaseModel):
    Name: str
    Unit: Union[MetricUnit, str]


class MetricDirective(BaseModel):
    Namespace: str
    Dimensions: List[List[str]]
    Metrics: List[MetricDefinition]


class EmfMetadata(BaseModel):
    """The ``_aws`` block CloudWatch uses to extract metrics from a log line."""

    Timestamp: int
    CloudWatchMetrics: List[MetricDirective]
