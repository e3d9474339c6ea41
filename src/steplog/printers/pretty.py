"""
Boxed multi-line printer.

Example:
    ┌───────────────────────────────────────────
    │ 💡 LEVEL: INFO
    │ 💬 MESSAGE: Payment accepted
    ├┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄
    │ 📋 STACK:
    │ #0      charge (/app/billing.py:88:9)
    └───────────────────────────────────────────
"""

from __future__ import annotations

from types import MappingProxyType

from steplog.ansi import AnsiColor
from steplog.config import LogConfig
from steplog.printers.base import StepPrinter
from steplog.records import LogRecord
from steplog.steps import LogStep

TOP_LEFT_CORNER = "┌"
BOTTOM_LEFT_CORNER = "└"
MIDDLE_CORNER = "├"
VERTICAL_LINE = "│"
DOUBLE_DIVIDER = "┄"
SINGLE_DIVIDER = "─"

DEFAULT_LINE_LENGTH = 120

# Sections preceded by a divider when earlier content exists
_DIVIDED_STEPS = frozenset({LogStep.ERROR, LogStep.STACKTRACE})


class PrettyPrinter(StepPrinter):
    """One labeled section per step inside a fixed-width panel."""

    MULTILINE = True

    STEP_FORMATS = MappingProxyType({
        LogStep.TIMESTAMP: "⏰ TIME: {value}",
        LogStep.DATE: "📅 DATE: {value}",
        LogStep.LEVEL: "{emoji} LEVEL: {value}",
        LogStep.TAG: "🏷️ TAG: {value}",
        LogStep.MESSAGE: "💬 MESSAGE: {value}",
        LogStep.ERROR: "❌ ERROR: {value}",
        LogStep.STACKTRACE: "📋 STACK:\n{value}",
        LogStep.THREAD: "🧵 THREAD: {value}",
        LogStep.LOCATION: "📍 LOCATION: {value}",
    })

    def __init__(
        self,
        config: LogConfig | None = None,
        *,
        line_length: int = DEFAULT_LINE_LENGTH,
        **kwargs,
    ):
        super().__init__(config, **kwargs)
        self.line_length = line_length

    def log(self, record: LogRecord) -> list[str]:
        color = self.level_color(record)
        lines = [self.top_border(color)]

        has_content = False
        for step, content in self.iter_steps(record):
            if has_content and step in _DIVIDED_STEPS:
                lines.append(self.middle_border(color))
            lines.extend(self.section(color, content))
            has_content = True

        lines.append(self.bottom_border(color))
        return lines

    def top_border(self, color: AnsiColor) -> str:
        return color(TOP_LEFT_CORNER + SINGLE_DIVIDER * (self.line_length - 1))

    def middle_border(self, color: AnsiColor) -> str:
        return color(MIDDLE_CORNER + DOUBLE_DIVIDER * (self.line_length - 1))

    def bottom_border(self, color: AnsiColor) -> str:
        return color(BOTTOM_LEFT_CORNER + SINGLE_DIVIDER * (self.line_length - 1))

    def section(self, color: AnsiColor, content: str) -> list[str]:
        return [color(f"{VERTICAL_LINE} {line}") for line in content.split("\n")]
