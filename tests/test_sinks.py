from __future__ import annotations

import io

from sg_logger import ConsoleSink, Logger, LoggerSettings


def test_console_sink_routes_by_level(capsys):
    sink = ConsoleSink()
    sink.debug("d")
    sink.info("i")
    sink.log("l")
    sink.warn("w")
    sink.error("e")

    captured = capsys.readouterr()
    assert captured.out == "d\ni\nl\n"
    assert captured.err == "w\ne\n"


def test_console_sink_explicit_streams():
    out, err = io.StringIO(), io.StringIO()
    sink = ConsoleSink(stdout=out, stderr=err)
    sink.info("i")
    sink.error("e")
    assert out.getvalue() == "i\n"
    assert err.getvalue() == "e\n"


def test_logger_writes_to_console_by_default(capsys):
    logger = Logger("testService", "testApp", correlation_id="testId", settings=LoggerSettings(log_level="info"))
    logger.info("Message")
    logger.error("Broken")

    captured = capsys.readouterr()
    assert captured.out == '{"level":"INFO","service":"testService","correlationId":"testId","message":"Message"}\n'
    assert captured.err == '{"level":"ERROR","service":"testService","correlationId":"testId","message":"Broken"}\n'
