"""Diagnostics logging for the logger library itself.

Records emitted by ``sg_logger.Logger`` go to its sink; faults inside the
logging pipeline are reported here instead. The library never calls
``structlog.configure`` or ``logging.basicConfig``: it wraps its own stdlib
logger, which stays silent (``NullHandler``) until the host application
attaches handlers to the ``sg_logger`` logger or the root logger.
"""
from __future__ import annotations

import logging

import structlog

LIBRARY_LOGGER = "sg_logger"

_PROCESSORS = [
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.format_exc_info,
    structlog.processors.JSONRenderer(),
]

logging.getLogger(LIBRARY_LOGGER).addHandler(logging.NullHandler())


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger writing to the stdlib ``name`` logger."""
    if name != LIBRARY_LOGGER and not name.startswith(LIBRARY_LOGGER + "."):
        name = f"{LIBRARY_LOGGER}.{name}"
    logger = structlog.wrap_logger(
        logging.getLogger(name),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )
    return logger.bind(component="sg-logger", logger=name)
