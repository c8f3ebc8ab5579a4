"""Correlation id and persistent context carried by a logger instance."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional


def new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class LogContextState:
    """Immutable snapshot of one invocation's correlation scope.

    ``owns_correlation_id`` is true when the id was generated here rather
    than supplied by the caller; only owned ids are regenerated on clear.
    """

    correlation_id: str
    owns_correlation_id: bool = True
    persistent_context: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(cls, correlation_id: Optional[str] = None) -> "LogContextState":
        if correlation_id:
            return cls(correlation_id=correlation_id, owns_correlation_id=False)
        return cls(correlation_id=new_id(), owns_correlation_id=True)

    def with_correlation_id(self, correlation_id: Optional[str]) -> "LogContextState":
        if not correlation_id:
            return self
        return replace(self, correlation_id=correlation_id, owns_correlation_id=False)

    def with_context(self, context: Any) -> "LogContextState":
        if not isinstance(context, Mapping):
            return self
        merged = {**self.persistent_context, **context}
        return replace(self, persistent_context=merged)

    def cleared(self) -> "LogContextState":
        correlation_id = new_id() if self.owns_correlation_id else self.correlation_id
        return replace(self, correlation_id=correlation_id, persistent_context={})

    def merged_context(self, context: Any = None) -> Dict[str, Any]:
        """Persistent context overlaid with the call's context."""
        merged = dict(self.persistent_context)
        if isinstance(context, Mapping):
            merged.update(context)
        return merged
