"""Destinations for formatted log lines."""
from __future__ import annotations

import sys
from typing import Optional, Protocol, TextIO


class Sink(Protocol):
    def debug(self, line: str) -> None: ...

    def info(self, line: str) -> None: ...

    def warn(self, line: str) -> None: ...

    def error(self, line: str) -> None: ...

    def log(self, line: str) -> None: ...


class ConsoleSink:
    """Console-like sink: debug/info/log to stdout, warn/error to stderr.

    Streams are looked up on every write so redirected ``sys.stdout`` and
    ``sys.stderr`` (pytest's capsys, the Lambda runtime) are honored.
    """

    def __init__(self, stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None) -> None:
        self._stdout = stdout
        self._stderr = stderr

    def _write(self, stream: Optional[TextIO], fallback: str, line: str) -> None:
        target = stream if stream is not None else getattr(sys, fallback)
        target.write(line + "\n")
        target.flush()

    def debug(self, line: str) -> None:
        self._write(self._stdout, "stdout", line)

    def info(self, line: str) -> None:
        self._write(self._stdout, "stdout", line)

    def log(self, line: str) -> None:
        self._write(self._stdout, "stdout", line)

    def warn(self, line: str) -> None:
        self._write(self._stderr, "stderr", line)

    def error(self, line: str) -> None:
        self._write(self._stderr, "stderr", line)
