from __future__ import annotations

import json
import logging
import os
import subprocess
import sys
import textwrap
from pathlib import Path

from sg_logger import Logger, LoggerSettings
from sg_logger.logging_setup import LIBRARY_LOGGER, get_logger

ROOT = Path(__file__).resolve().parents[1]


class BrokenSink:
    def __getattr__(self, name):
        def write(line):
            raise OSError("stream closed")

        return write


def test_import_leaves_host_configuration_alone():
    script = textwrap.dedent(
        """
        import logging
        import structlog

        handler = logging.StreamHandler()
        logging.getLogger().addHandler(handler)
        logging.getLogger().setLevel(logging.ERROR)
        processors = [structlog.processors.KeyValueRenderer()]
        structlog.configure(processors=processors)

        import sg_logger
        sg_logger.Logger("svc", "app", settings=sg_logger.LoggerSettings(), sink=None)

        assert structlog.get_config()["processors"] == processors
        assert logging.getLogger().handlers == [handler]
        assert logging.getLogger().level == logging.ERROR
        print("ok")
        """
    )
    env = dict(os.environ, PYTHONPATH=str(ROOT))
    result = subprocess.run(
        [sys.executable, "-c", script],
        capture_output=True,
        text=True,
        env=env,
        cwd=str(ROOT),
        timeout=60,
    )
    assert result.returncode == 0, result.stderr
    assert result.stdout.strip() == "ok"


def test_library_logger_is_silent_by_default():
    handlers = logging.getLogger(LIBRARY_LOGGER).handlers
    assert any(isinstance(handler, logging.NullHandler) for handler in handlers)


def test_get_logger_stays_under_library_namespace():
    assert get_logger("sg_logger.logger")._logger.name == "sg_logger.logger"
    assert get_logger("elsewhere")._logger.name == "sg_logger.elsewhere"


def test_pipeline_error_reaches_host_handlers(caplog):
    logger = Logger("svc", "app", settings=LoggerSettings(log_level="debug"), sink=BrokenSink())
    with caplog.at_level(logging.WARNING, logger=LIBRARY_LOGGER):
        logger.info("hello")

    assert logger.failures == 1
    [record] = [record for record in caplog.records if record.name.startswith(LIBRARY_LOGGER)]
    event = json.loads(record.getMessage())
    assert event["event"] == "log_pipeline_error"
    assert event["component"] == "sg-logger"
    assert event["error"] == "stream closed"
