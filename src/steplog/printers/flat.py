"""
Bracketed flat printer.

Example: [2026-02-12][14:32:05][AuthService][INFO] User logged in
"""

from types import MappingProxyType

from steplog.printers.base import StepPrinter
from steplog.records import LogRecord
from steplog.steps import LogStep


class FlatPrinter(StepPrinter):
    """
    Every non-message step is bracketed in step order; the message is
    appended bare with a leading space.
    """

    STEP_FORMATS = MappingProxyType({
        LogStep.TIMESTAMP: "{value}",
        LogStep.DATE: "{value}",
        LogStep.LEVEL: "{value}",
        LogStep.TAG: "{value}",
        LogStep.THREAD: "T:{value}",
        LogStep.LOCATION: "LOC:{value}",
        LogStep.MESSAGE: "{value}",
        LogStep.ERROR: "ERROR: {value}",
        LogStep.STACKTRACE: "STACK: {value}",
    })

    def prepare(self, step: LogStep, value: str, record: LogRecord) -> str:
        if step is LogStep.LEVEL:
            return self.level_color(record)(value)
        return value

    def log(self, record: LogRecord) -> list[str]:
        parts = []
        for step, value in self.iter_steps(record):
            if step is LogStep.MESSAGE:
                parts.append(f" {value}")
            else:
                parts.append(f"[{value}]")
        return ["".join(parts)]
