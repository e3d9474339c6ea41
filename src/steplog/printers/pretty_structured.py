"""
Boxed printer with aligned labels.

Example:
    ┌──────────────────────────────────────────
    │ 💡 LEVEL           : INFO
    │ 🔍 MESSAGE         : Cache warmed
    │ 📁 CALL STACK      : 
    │    • #0      warm (/app/cache.py:12:5)
    └──────────────────────────────────────────
"""

from __future__ import annotations

from types import MappingProxyType

from steplog.config import LogConfig
from steplog.printers.base import StepPrinter
from steplog.printers.pretty import (
    BOTTOM_LEFT_CORNER,
    DEFAULT_LINE_LENGTH,
    SINGLE_DIVIDER,
    TOP_LEFT_CORNER,
    VERTICAL_LINE,
)
from steplog.records import LogRecord
from steplog.stacktrace import DEFAULT_ERROR_METHOD_COUNT
from steplog.steps import LogStep

LABEL_WIDTH = 16
BULLET = "•"
DEFAULT_EMOJI = "📝"


def label(text: str) -> str:
    return text.ljust(LABEL_WIDTH)


class PrettyStructuredPrinter(StepPrinter):
    """
    Like PrettyPrinter, but every label is padded to a fixed column and
    STACKTRACE becomes a header followed by bulleted frames.
    """

    MULTILINE = True

    STEP_FORMATS = MappingProxyType({
        LogStep.TIMESTAMP: f"📅 {label('TIMESTAMP')}: {{value}}",
        LogStep.DATE: f"📅 {label('DATE')}: {{value}}",
        LogStep.LEVEL: f"{{emoji}} {label('LEVEL')}: {{value}}",
        LogStep.TAG: f"🧩 {label('MODULE')}: {{value}}",
        LogStep.MESSAGE: f"🔍 {label('MESSAGE')}: {{value}}",
        LogStep.ERROR: f"❌ {label('ERROR')}: {{value}}",
        LogStep.STACKTRACE: None,
        LogStep.THREAD: f"🧵 {label('THREAD')}: {{value}}",
        LogStep.LOCATION: f"📍 {label('LOCATION')}: {{value}}",
    })

    def __init__(
        self,
        config: LogConfig | None = None,
        *,
        line_length: int = DEFAULT_LINE_LENGTH,
        method_count: int = 3,
        error_method_count: int = DEFAULT_ERROR_METHOD_COUNT,
        **kwargs,
    ):
        super().__init__(
            config,
            method_count=method_count,
            error_method_count=error_method_count,
            **kwargs,
        )
        self.line_length = line_length

    def emoji(self, record: LogRecord) -> str:
        return super().emoji(record) or DEFAULT_EMOJI

    def log(self, record: LogRecord) -> list[str]:
        color = self.level_color(record)
        lines = [color(TOP_LEFT_CORNER + SINGLE_DIVIDER * (self.line_length - 1))]

        for step in self.config.steps:
            if step is LogStep.STACKTRACE:
                frames = self.extract_stack(record)
                if frames:
                    lines.append(color(f"{VERTICAL_LINE} 📁 {label('CALL STACK')}: "))
                    lines.extend(color(f"{VERTICAL_LINE}    {BULLET} {f}") for f in frames)
                continue
            content = self.step_value(step, record)
            if content:
                lines.extend(color(f"{VERTICAL_LINE} {line}") for line in content.split("\n"))

        lines.append(color(BOTTOM_LEFT_CORNER + SINGLE_DIVIDER * (self.line_length - 1)))
        return lines
