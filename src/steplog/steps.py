"""
Step and strategy enumerations.

Both sets are closed: every printer must handle every LogStep, and
get_printer() must map every LogType.
"""

from enum import Enum


class LogStep(str, Enum):
    """One orderable unit of rendered log content."""
    TIMESTAMP = "timestamp"
    DATE = "date"
    LEVEL = "level"
    TAG = "tag"
    THREAD = "thread"
    LOCATION = "location"
    MESSAGE = "message"
    ERROR = "error"
    STACKTRACE = "stacktrace"

    @classmethod
    def from_value(cls, value: "str | LogStep") -> "LogStep":
        """Resolve a step from its name, case-insensitive."""
        if isinstance(value, LogStep):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(
                f"Invalid log step '{value}'. "
                f"Valid steps: {', '.join(m.name for m in cls)}"
            ) from None


DEFAULT_STEPS: tuple[LogStep, ...] = (
    LogStep.DATE,
    LogStep.TIMESTAMP,
    LogStep.TAG,
    LogStep.LEVEL,
    LogStep.MESSAGE,
    LogStep.THREAD,
    LogStep.LOCATION,
    LogStep.ERROR,
    LogStep.STACKTRACE,
)


class LogType(str, Enum):
    """Rendering strategy ("style") selector."""
    SIMPLE = "simple"
    FLAT = "flat"
    FLAT_STRUCTURED = "flat_structured"
    FMT = "fmt"
    PREFIX = "prefix"
    PRETTY = "pretty"
    PRETTY_STRUCTURED = "pretty_structured"
    HYBRID = "hybrid"

    @classmethod
    def from_name(cls, name: "str | LogType") -> "LogType":
        """Resolve a strategy from its name, case-insensitive."""
        if isinstance(name, LogType):
            return name
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise ValueError(
                f"Invalid log type '{name}'. "
                f"Valid types: {', '.join(m.name for m in cls)}"
            ) from None
