"""Example Lambda handler: multiplies 1..5 by a factor and reports how long it took."""
from __future__ import annotations

import time
from typing import Any, Dict, List, Optional

from sg_logger import Logger, MetricUnit

SERVICE = "multiply"
APPLICATION = "sg-logger-example"
MAX_FACTOR = 10


def build_logger(correlation_id: Optional[str] = None) -> Logger:
    return Logger(SERVICE, APPLICATION, correlation_id=correlation_id)


def multiply(logger: Logger, n: int, factor: int) -> int:
    result = n * factor
    # userid is masked by the default blocklist
    logger.debug("Multiply", {"n": n, "result": result, "userid": "mySecretUser"})
    return result


def handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    logger = build_logger()
    try:
        logger.set_correlation_id(event.get("correlationId"))
        logger.log_input_event({"event": event, "requestId": getattr(context, "aws_request_id", None)})
        logger.add_context_key({"handlerNamespace": "multiply"})

        factor = event.get("factor")
        if factor:
            logger.add_context_key({"factor": factor})
            if factor > MAX_FACTOR:
                cause = {"factor": factor, "limit": MAX_FACTOR, "reason": "too big"}
                logger.error("invalid factor", cause)
                error = ValueError("invalid factor")
                error.cause = cause  # type: ignore[attr-defined]
                raise error

        start = time.perf_counter()
        result: List[int] = [multiply(logger, n, factor or 1) for n in range(1, 6)]
        elapsed_ms = (time.perf_counter() - start) * 1000

        logger.warn("result", {"result": result}, {}, ["factor"])
        logger.metric(
            "multiply",
            {
                "name": "Duration",
                "unit": MetricUnit.Milliseconds,
                "value": elapsed_ms,
                "dimensions": [["factor", str(factor or 1)]],
            },
        )
        return {"result": result, "correlationId": logger.get_correlation_id()}
    except Exception as exc:
        logger.error("global error", exc)
        return {"error": str(exc), "correlationId": logger.get_correlation_id()}
    finally:
        logger.clear_log_context()
