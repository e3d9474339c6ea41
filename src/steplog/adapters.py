"""
Log adapters (output destinations).

One logger, multiple adapters. The logger renders a record once and hands
the resulting lines to every adapter whose min_level admits it.
Writing to files or the network is deliberately not provided.
"""

from __future__ import annotations

import sys
import threading
from abc import ABC, abstractmethod
from collections import deque
from typing import Callable, Sequence, TextIO

from steplog.records import LogLevel, LogRecord


class LogAdapter(ABC):
    """Base adapter. Receives rendered lines for a record."""

    def __init__(self, name: str, min_level: int = LogLevel.TRACE):
        self.name = name
        self.min_level = min_level

    def accepts(self, record: LogRecord) -> bool:
        return record.level >= self.min_level

    @abstractmethod
    def emit(self, record: LogRecord, lines: Sequence[str]) -> None:
        """Write rendered lines. Called only after the level filter passes."""
        ...

    def flush(self) -> None:
        """Flush any buffered output. Override in buffered adapters."""
        pass

    def close(self) -> None:
        """Cleanup. Override if adapter holds resources."""
        self.flush()


class TerminalAdapter(LogAdapter):
    """
    Writes to stdout/stderr.
    ERROR+ goes to stderr, everything else to stdout.
    """

    def __init__(
        self,
        name: str = "terminal",
        min_level: int = LogLevel.TRACE,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ):
        super().__init__(name, min_level)
        self._stdout = stdout
        self._stderr = stderr

    def _stream(self, record: LogRecord) -> TextIO:
        # Resolved per call so pytest's capsys and patched streams are honored
        if record.level >= LogLevel.ERROR:
            return self._stderr or sys.stderr
        return self._stdout or sys.stdout

    def emit(self, record: LogRecord, lines: Sequence[str]) -> None:
        stream = self._stream(record)
        for line in lines:
            print(line, file=stream, flush=True)


class CallbackAdapter(LogAdapter):
    """Hands each rendered line to a callable, e.g. list.append."""

    def __init__(
        self,
        output: Callable[[str], None],
        name: str = "callback",
        min_level: int = LogLevel.TRACE,
    ):
        super().__init__(name, min_level)
        self.output = output

    def emit(self, record: LogRecord, lines: Sequence[str]) -> None:
        for line in lines:
            self.output(line)


class BufferAdapter(LogAdapter):
    """
    Ring buffer of the last N rendered lines.
    Does not grow unbounded; oldest lines fall off first.
    """

    def __init__(
        self,
        name: str = "buffer",
        min_level: int = LogLevel.TRACE,
        buffer_size: int = 10000,
    ):
        super().__init__(name, min_level)
        self._buffer: deque[str] = deque(maxlen=buffer_size)
        self._lock = threading.Lock()

    def emit(self, record: LogRecord, lines: Sequence[str]) -> None:
        with self._lock:
            self._buffer.extend(lines)

    def get_recent(self, n: int = 100) -> list[str]:
        with self._lock:
            lines = list(self._buffer)
        return lines[-n:] if n > 0 else []

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()

    @property
    def count(self) -> int:
        return len(self._buffer)

    @property
    def maxlen(self) -> int | None:
        return self._buffer.maxlen
