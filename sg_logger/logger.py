"""Structured JSON logger for serverless handlers.

Each call renders exactly one line: payloads are masked, size gated and
written to the sink method matching the level; metrics are rendered as
CloudWatch embedded metric blocks. Nothing here raises into the caller.
"""
from __future__ import annotations

import contextlib
import time
from typing import Any, Callable, Dict, FrozenSet, Iterable, Mapping, Optional, Union

from .config import LoggerSettings, get_settings
from .constants import (
    DEFAULT_SENSITIVE_ATTRIBUTES,
    INPUT_EVENT_MESSAGE,
    LEVEL_ORDINALS,
    MAX_PAYLOAD_MESSAGE,
    RESET_SENSITIVE_MESSAGE,
    MetricUnit,
)
from .context import LogContextState
from .errors import format_error, is_error
from .logging_setup import get_logger
from .masking import OMIT, mask, normalize_keys, to_json
from .schemas import EmfMetadata, LogRecord, MetricDefinition, MetricDirective, MetricMeta
from .sinks import ConsoleSink, Sink
from .sizing import SizedPayload, size_payload

logger = get_logger(__name__)

ErrorHook = Callable[[Exception], None]


def _epoch_ms() -> int:
    return int(time.time() * 1000)


class Logger:
    METRIC_UNITS = MetricUnit
    DEFAULT_SENSITIVE_ATTRIBUTES = DEFAULT_SENSITIVE_ATTRIBUTES

    def __init__(
        self,
        service_name: str,
        application_name: str,
        correlation_id: Optional[str] = None,
        additional_sensitive_attributes: Optional[Iterable[str]] = None,
        override_sensitive_attributes: Optional[Iterable[str]] = None,
        settings: Optional[LoggerSettings] = None,
        sink: Optional[Sink] = None,
        on_error: Optional[ErrorHook] = None,
    ) -> None:
        self._service_name = service_name
        self._application_name = application_name
        self._state = LogContextState.create(correlation_id)
        self._settings = settings if settings is not None else get_settings()
        self._sink = sink if sink is not None else ConsoleSink()
        self._on_error = on_error
        self._sensitive_attributes = self._initial_sensitive_attributes(
            additional_sensitive_attributes, override_sensitive_attributes
        )
        self.failures = 0

    @staticmethod
    def _initial_sensitive_attributes(
        additional: Optional[Iterable[str]], override: Optional[Iterable[str]]
    ) -> FrozenSet[str]:
        if override is not None:
            return frozenset(normalize_keys(override))
        return frozenset(DEFAULT_SENSITIVE_ATTRIBUTES) | normalize_keys(additional)

    @property
    def service_name(self) -> str:
        return self._service_name

    @property
    def application_name(self) -> str:
        return self._application_name

    @property
    def settings(self) -> LoggerSettings:
        return self._settings

    @property
    def sensitive_attributes(self) -> FrozenSet[str]:
        return self._sensitive_attributes

    @property
    def context_state(self) -> LogContextState:
        return self._state

    # Records

    def log(
        self,
        level: str,
        message: str = "",
        payload: Any = None,
        context: Optional[Mapping[str, Any]] = None,
        sensitive_attributes: Optional[Iterable[str]] = None,
    ) -> None:
        try:
            level = level.lower()
            if not self.is_enabled_for(level):
                return
            self._emit(level, message, payload, context, sensitive_attributes)
        except Exception as exc:
            self._report_failure(exc, operation="log", level=level)

    def is_enabled_for(self, level: str) -> bool:
        return LEVEL_ORDINALS.get(level, -1) >= LEVEL_ORDINALS[self._settings.log_level]

    def _emit(
        self,
        level: str,
        message: Any,
        payload: Any,
        context: Optional[Mapping[str, Any]],
        sensitive_attributes: Optional[Iterable[str]],
    ) -> None:
        keys = self._sensitive_attributes | normalize_keys(sensitive_attributes)
        message = "" if message is None else str(message)

        error: Any = OMIT
        if is_error(payload):
            error = self._safe_mask(format_error(payload), keys)
            sized = SizedPayload()
        else:
            sized = size_payload(level, message, self._safe_mask(payload, keys), self._settings)
            if sized.oversize is not None:
                self.warn(MAX_PAYLOAD_MESSAGE, sized.oversize.as_payload())

        context_to_log = self._state.merged_context(context)
        if sized.gzip:
            context_to_log["gzip"] = True
        masked_context = self._safe_mask(context_to_log, keys)

        record = LogRecord(
            timestamp=_epoch_ms() if self._settings.log_ts else None,
            level=level.upper(),
            service=self._service_name,
            correlation_id=self._state.correlation_id,
            message=message,
            context=None if masked_context is OMIT else masked_context,
            payload=None if sized.payload is OMIT else sized.payload,
            error=None if error is OMIT else error,
        )
        self._write(level, to_json(record.to_dict()))

    def _safe_mask(self, value: Any, keys: FrozenSet[str]) -> Any:
        try:
            return mask(value, keys, enabled=self._settings.mask)
        except Exception as exc:
            logger.debug("payload_unserializable", service=self._service_name, error=str(exc))
            return OMIT

    def _write(self, level: str, line: str) -> None:
        getattr(self._sink, level)(line)

    def _report_failure(self, exc: Exception, **details: Any) -> None:
        self.failures += 1
        with contextlib.suppress(Exception):
            if self._on_error is not None:
                self._on_error(exc)
            else:
                logger.warning(
                    "log_pipeline_error",
                    service=self._service_name,
                    error=str(exc),
                    exc_info=exc,
                    **details,
                )

    def info(
        self,
        message: str = "",
        payload: Any = None,
        context: Optional[Mapping[str, Any]] = None,
        sensitive_attributes: Optional[Iterable[str]] = None,
    ) -> None:
        self.log("info", message, payload, context, sensitive_attributes)

    def debug(
        self,
        message: str = "",
        payload: Any = None,
        context: Optional[Mapping[str, Any]] = None,
        sensitive_attributes: Optional[Iterable[str]] = None,
    ) -> None:
        self.log("debug", message, payload, context, sensitive_attributes)

    def warn(
        self,
        message: str = "",
        payload: Any = None,
        context: Optional[Mapping[str, Any]] = None,
        sensitive_attributes: Optional[Iterable[str]] = None,
    ) -> None:
        self.log("warn", message, payload, context, sensitive_attributes)

    warning = warn

    def error(
        self,
        message: str = "",
        payload: Any = None,
        context: Optional[Mapping[str, Any]] = None,
        sensitive_attributes: Optional[Iterable[str]] = None,
    ) -> None:
        self.log("error", message, payload, context, sensitive_attributes)

    def log_input_event(self, event: Any) -> None:
        """Log the triggering event once per invocation, if enabled."""
        if self._settings.log_event:
            self.info(INPUT_EVENT_MESSAGE, event, {})

    # Correlation scope

    def get_correlation_id(self) -> str:
        return self._state.correlation_id

    def set_correlation_id(self, correlation_id: Optional[str]) -> None:
        self._state = self._state.with_correlation_id(correlation_id)

    def add_context_key(self, context: Mapping[str, Any]) -> None:
        self._state = self._state.with_context(context)

    def clear_log_context(self) -> None:
        self._state = self._state.cleared()

    def reset_sensitive_attributes(self) -> None:
        self._sensitive_attributes = frozenset(DEFAULT_SENSITIVE_ATTRIBUTES)
        self.log("info", RESET_SENSITIVE_MESSAGE)

    # Metrics

    def metric(self, activity: str, meta: Union[MetricMeta, Mapping[str, Any], None] = None, **fields: Any) -> None:
        """Emit one embedded metric line; ``meta`` or keyword fields give name/value/unit/dimensions."""
        try:
            if meta is None:
                meta = fields
            if not isinstance(meta, MetricMeta):
                meta = MetricMeta(**meta)
            if not meta.name:
                return
            self._sink.log(to_json(self._build_emf(activity, meta)))
        except Exception as exc:
            self._report_failure(exc, operation="metric", activity=activity)

    def _build_emf(self, activity: str, meta: MetricMeta) -> Dict[str, Any]:
        dimension_names = [key for key, _ in meta.dimensions]
        emf: Dict[str, Any] = {
            "message": f"[Embedded Metric] {activity}",
            "service": self._service_name,
            "correlationId": self._state.correlation_id,
            meta.name: meta.numeric_value,
        }
        for key, value in meta.dimensions:
            emf[key] = str(value)
        emf["Activity"] = activity
        metadata = EmfMetadata(
            Timestamp=_epoch_ms(),
            CloudWatchMetrics=[
                MetricDirective(
                    Namespace=self._application_name,
                    Dimensions=[
                        ["Activity", *dimension_names],
                        ["Activity"],
                        *[[name] for name in dimension_names],
                    ],
                    Metrics=[MetricDefinition(Name=meta.name, Unit=meta.resolved_unit)],
                )
            ],
        )
        emf["_aws"] = metadata.model_dump(mode="json")
        return emf
