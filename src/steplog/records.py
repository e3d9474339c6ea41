"""
Log records and level definitions.

Levels keep Python-compatible spacing so they interleave with the stdlib.
A record is an immutable snapshot of one logging call; its code location
is derived lazily from the attached stack trace and cached.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import IntEnum
from functools import cached_property
from types import TracebackType
from typing import Any, Optional

from steplog import stacktrace
from steplog.stacktrace import Location


class LogLevel(IntEnum):
    """Severity levels, ordered by ascending criticality."""
    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40
    FATAL = 50
    OFF = 60     # Disables output at the dispatch layer

    @property
    def label(self) -> str:
        """Display name used verbatim in rendered output."""
        return _LABELS.get(self, self.name)

    def is_enabled_for(self, minimum: "LogLevel") -> bool:
        """True when this level is at least as severe as `minimum`."""
        return self >= minimum

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """Resolve level from member name or label, case-insensitive."""
        name_upper = name.strip().upper()
        if name_upper in cls.__members__:
            return cls[name_upper]
        for member in cls:
            if member.label == name_upper:
                return member
        raise ValueError(
            f"Unknown log level '{name}'. "
            f"Valid levels: {', '.join(m.name for m in cls)}"
        )

    @classmethod
    def from_value(cls, value: int | str) -> "LogLevel":
        """Resolve level from int or string."""
        if isinstance(value, LogLevel):
            return value
        if isinstance(value, str):
            return cls.from_name(value)
        if isinstance(value, int):
            for member in cls:
                if member.value == value:
                    return member
            raise ValueError(
                f"No level with value {value}. "
                f"Valid values: {', '.join(f'{m.name}={m.value}' for m in cls)}"
            )
        raise TypeError(f"Expected int or str, got {type(value).__name__}")


_LABELS: dict[LogLevel, str] = {LogLevel.WARN: "WARNING"}


@dataclass(frozen=True)
class LogRecord:
    """
    Immutable log record. Created per logging call, consumed by a printer.

    `stack_trace` holds raw trace text in the "#<n> <function> (<path>:<line>:<col>)"
    frame format; `location` is parsed from it on first access and cached.
    """
    level: LogLevel
    message: Any
    timestamp: datetime
    logger_name: Optional[str] = None
    error: Any = None
    stack_trace: Optional[str] = None

    @classmethod
    def create(
        cls,
        level: LogLevel | int | str,
        message: Any,
        *,
        logger_name: str | None = None,
        error: Any = None,
        stack_trace: str | TracebackType | None = None,
        capture_stack: bool = False,
        timestamp: datetime | None = None,
    ) -> "LogRecord":
        """Factory with auto-timestamp and trace normalization."""
        if isinstance(stack_trace, TracebackType):
            stack_trace = stacktrace.format_traceback(stack_trace)
        elif stack_trace is None:
            tb = getattr(error, "__traceback__", None)
            if isinstance(error, BaseException) and tb is not None:
                stack_trace = stacktrace.format_traceback(tb)
            elif capture_stack:
                stack_trace = stacktrace.capture_stack(skip=1)

        return cls(
            level=LogLevel.from_value(level),
            message=message,
            timestamp=timestamp or datetime.now(timezone.utc),
            logger_name=logger_name,
            error=error,
            stack_trace=stack_trace,
        )

    @cached_property
    def location(self) -> Location | None:
        """Nearest caller frame, or None when the trace is missing or unparsable."""
        return stacktrace.extract_location(self.stack_trace)

    def __str__(self) -> str:
        return f"[{self.level.label}] {self.message}"
