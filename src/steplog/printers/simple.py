"""
Minimal single-line printer.

Example: 14:32:05 💡[I] [AuthService] User logged in
"""

from types import MappingProxyType

from steplog.printers.base import StepPrinter, join_inline
from steplog.records import LogRecord
from steplog.steps import LogStep


class SimplePrinter(StepPrinter):
    """Space-joined steps, level truncated to its initial, whole line colorized."""

    STEP_FORMATS = MappingProxyType({
        LogStep.TIMESTAMP: "{value}",
        LogStep.DATE: "{value}",
        LogStep.LEVEL: "{emoji}[{initial}]",
        LogStep.TAG: "[{value}]",
        LogStep.THREAD: "[T:{value}]",
        LogStep.LOCATION: "({value})",
        LogStep.MESSAGE: "{value}",
        LogStep.ERROR: "ERROR: {value}",
        LogStep.STACKTRACE: "\n{value}",
    })

    def log(self, record: LogRecord) -> list[str]:
        text = join_inline(value for _, value in self.iter_steps(record))
        color = self.level_color(record)
        return [color(line) for line in text.split("\n")]
