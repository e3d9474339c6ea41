"""
Printer base classes and the shared step resolver.

Every printer walks `config.steps` in order. The StepResolver decides
whether a step contributes and what its raw text is; printers only
decide layout (label templates, joiner, borders, color). Gating rules
therefore live in exactly one place.

Step printers declare STEP_FORMATS, a table covering every LogStep. A
class whose table misses a step fails at definition time with TypeError.
A None entry marks a step the printer renders through its own branch.
"""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Any, ClassVar, Iterable, Iterator, Optional, Sequence, assert_never

from steplog.ansi import AnsiColor, level_color, level_emoji
from steplog.config import LogConfig
from steplog.records import LogRecord
from steplog.stacktrace import (
    DEFAULT_ERROR_METHOD_COUNT,
    DEFAULT_EXCLUDE_PATHS,
    DEFAULT_METHOD_COUNT,
    format_stack_trace,
)
from steplog.steps import LogStep

NO_MESSAGE = "No log message"

# Single-threaded core: THREAD always renders this placeholder
THREAD_PLACEHOLDER = "main"

INDENT_UNIT = "  "


# ═══════════════════════════════════════════════════════════════════
#  Step Resolver
# ═══════════════════════════════════════════════════════════════════

class StepResolver:
    """
    Maps (step, record) to an optional raw text contribution.

    The rules are identical for every printer; printers add labels.
    """

    def __init__(
        self,
        config: LogConfig,
        *,
        exclude_paths: Sequence[str] = DEFAULT_EXCLUDE_PATHS,
        begin_index: int = 0,
    ):
        self.config = config
        self.exclude_paths = tuple(exclude_paths)
        self.begin_index = begin_index

    def resolve(
        self,
        step: LogStep,
        record: LogRecord,
        *,
        multiline: bool = True,
        method_count: int = DEFAULT_METHOD_COUNT,
    ) -> str | None:
        match step:
            case LogStep.TIMESTAMP:
                return self.timestamp(record)
            case LogStep.DATE:
                return self.date(record)
            case LogStep.LEVEL:
                return record.level.label if self.config.show_level else None
            case LogStep.TAG:
                return self.tag(record)
            case LogStep.THREAD:
                return THREAD_PLACEHOLDER if self.config.show_thread else None
            case LogStep.LOCATION:
                return self.location(record, multiline)
            case LogStep.MESSAGE:
                return stringify(record.message)
            case LogStep.ERROR:
                return str(record.error) if record.error is not None else None
            case LogStep.STACKTRACE:
                return self.stack(record, method_count)
            case _:
                assert_never(step)

    def timestamp(self, record: LogRecord) -> str | None:
        cfg = self.config
        if not cfg.show_timestamp:
            return None
        if cfg.show_time_only:
            return format_time_only(record.timestamp)
        return format_timestamp(record.timestamp, cfg.use_human_readable_time)

    def date(self, record: LogRecord) -> str | None:
        cfg = self.config
        if not (cfg.show_date_only and cfg.show_timestamp):
            return None
        # Same zone as the TIMESTAMP step: local unless rendering ISO
        local = cfg.show_time_only or cfg.use_human_readable_time
        return format_date(record.timestamp, local=local)

    def tag(self, record: LogRecord) -> str | None:
        if not self.config.show_tag or not record.logger_name:
            return None
        return record.logger_name

    def location(self, record: LogRecord, multiline: bool) -> str | None:
        if not self.config.show_location:
            return None
        location = record.location
        if location is None:
            return None
        return str(location) if multiline else location.summary

    def stack(self, record: LogRecord, method_count: int) -> str | None:
        if not record.stack_trace:
            return None
        return format_stack_trace(
            record.stack_trace,
            method_count,
            exclude_paths=self.exclude_paths,
            begin_index=self.begin_index,
        )


# ═══════════════════════════════════════════════════════════════════
#  Printers
# ═══════════════════════════════════════════════════════════════════

class LogPrinter(ABC):
    """Base printer. Transforms LogRecord → rendered lines."""

    def __init__(self, config: LogConfig | None = None, *, color: bool = True):
        self.config = config or LogConfig()
        self.color = color

    @abstractmethod
    def log(self, record: LogRecord) -> list[str]: ...

    def level_color(self, record: LogRecord) -> AnsiColor:
        return level_color(record.level) if self.color else AnsiColor.none()


class StepPrinter(LogPrinter):
    """
    Printer driven by a STEP_FORMATS table.

    Templates are str.format strings with the fields:
        value    raw step text from the resolver
        emoji    level emoji ("" when emoji display is off)
        initial  first character of the raw value
    """

    STEP_FORMATS: ClassVar[Mapping[LogStep, Optional[str]]]
    # Multi-line printers get the full two-line location
    MULTILINE: ClassVar[bool] = False
    # Drop a step whose resolved value is empty instead of rendering its label
    SKIP_EMPTY: ClassVar[bool] = False

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        formats = getattr(cls, "STEP_FORMATS", None)
        if formats is None:
            raise TypeError(f"{cls.__name__} must define STEP_FORMATS")
        missing = [step.name for step in LogStep if step not in formats]
        if missing:
            raise TypeError(
                f"{cls.__name__}.STEP_FORMATS does not handle: {', '.join(missing)}"
            )

    def __init__(
        self,
        config: LogConfig | None = None,
        *,
        color: bool = True,
        method_count: int = DEFAULT_METHOD_COUNT,
        error_method_count: int = DEFAULT_ERROR_METHOD_COUNT,
        stack_begin_index: int = 0,
        exclude_paths: Sequence[str] | None = None,
    ):
        super().__init__(config, color=color)
        self.method_count = method_count
        self.error_method_count = error_method_count
        self.exclude_paths = tuple(
            DEFAULT_EXCLUDE_PATHS if exclude_paths is None else exclude_paths
        )
        self.resolver = StepResolver(
            self.config,
            exclude_paths=self.exclude_paths,
            begin_index=stack_begin_index,
        )

    def frame_budget(self, record: LogRecord) -> int:
        """Error records get the larger stack-frame budget."""
        return self.error_method_count if record.error is not None else self.method_count

    def emoji(self, record: LogRecord) -> str:
        return level_emoji(record.level) if self.config.show_emoji else ""

    def prepare(self, step: LogStep, value: str, record: LogRecord) -> str:
        """Hook to transform the raw value before it enters the template."""
        return value

    def step_value(self, step: LogStep, record: LogRecord) -> str | None:
        template = self.STEP_FORMATS[step]
        if template is None:
            return None
        value = self.resolver.resolve(
            step,
            record,
            multiline=self.MULTILINE,
            method_count=self.frame_budget(record),
        )
        if value is None or (self.SKIP_EMPTY and not value):
            return None
        value = self.prepare(step, value, record)
        return template.format(value=value, emoji=self.emoji(record), initial=value[:1])

    def iter_steps(self, record: LogRecord) -> Iterator[tuple[LogStep, str]]:
        """Yield (step, text) for every configured step that contributes."""
        for step in self.config.steps:
            text = self.step_value(step, record)
            if text:
                yield step, text

    def extract_stack(self, record: LogRecord) -> list[str]:
        """Budgeted stack frames for printers that lay out frames themselves."""
        formatted = self.resolver.stack(record, self.frame_budget(record))
        return formatted.split("\n") if formatted else []


# ═══════════════════════════════════════════════════════════════════
#  Helpers
# ═══════════════════════════════════════════════════════════════════

def stringify(message: Any) -> str:
    """
    Render a message. None gets a placeholder, zero-argument callables are
    invoked lazily, containers are pretty-printed with 2-space indents.
    """
    if message is None:
        return NO_MESSAGE
    if callable(message) and not isinstance(message, type) and _takes_no_arguments(message):
        return str(message())
    return pretty_format(message)


def _takes_no_arguments(func: Any) -> bool:
    try:
        inspect.signature(func).bind()
    except (TypeError, ValueError):
        return False
    return True


def join_inline(values: Iterable[str]) -> str:
    """Space-join step texts; a text opening a new line attaches without the space."""
    text = ""
    for value in values:
        if text and not value.startswith("\n"):
            text += " "
        text += value
    return text


def pretty_format(value: Any, indent_level: int = 0) -> str:
    if isinstance(value, str):
        return value

    indent = INDENT_UNIT * indent_level
    next_indent = INDENT_UNIT * (indent_level + 1)

    if isinstance(value, (list, tuple)):
        if not value:
            return "[]"
        items = [
            f"{next_indent}{pretty_format(item, indent_level + 1)}"
            for item in value
        ]
        return "[\n" + ",\n".join(items) + f"\n{indent}]"

    if isinstance(value, Mapping):
        if not value:
            return "{}"
        items = [
            f'{next_indent}"{key}": {pretty_format(val, indent_level + 1)}'
            for key, val in value.items()
        ]
        return "{\n" + ",\n".join(items) + f"\n{indent}}}"

    return str(value)


_WEEKDAYS = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)
_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def format_timestamp(time: datetime, human_readable: bool) -> str:
    """
    ISO-8601, or the long form in local time:
    Saturday, 18th October, 2026 | 3:05PM
    """
    if not human_readable:
        return time.isoformat()

    local = time.astimezone()
    hour = local.hour % 12 or 12
    period = "PM" if local.hour >= 12 else "AM"
    return (
        f"{_WEEKDAYS[local.weekday()]}, {local.day}{day_suffix(local.day)} "
        f"{_MONTHS[local.month - 1]}, {local.year} | {hour}:{local.minute:02d}{period}"
    )


def format_time_only(time: datetime) -> str:
    return time.astimezone().strftime("%H:%M:%S")


def format_date(time: datetime, local: bool = True) -> str:
    return (time.astimezone() if local else time).date().isoformat()


def format_elapsed(elapsed: timedelta) -> str:
    return f"+{str(elapsed).split('.')[0]}"


def day_suffix(day: int) -> str:
    if 11 <= day <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
