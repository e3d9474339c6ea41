"""
logfmt-style key=value printer.

Example: level=info msg="User logged in" time="14:32:05" logger="AuthService"

Output is machine-parseable and never colorized. Double quotes and
newlines inside values are backslash-escaped.
"""

from types import MappingProxyType

from steplog.printers.base import StepPrinter
from steplog.records import LogRecord
from steplog.steps import LogStep


def escape(value: str) -> str:
    return value.replace('"', '\\"').replace("\n", "\\n")


class FmtPrinter(StepPrinter):
    """Space-joined key="value" pairs, one per contributing step. Empty values get no key."""

    SKIP_EMPTY = True

    STEP_FORMATS = MappingProxyType({
        LogStep.LEVEL: "level={value}",
        LogStep.MESSAGE: 'msg="{value}"',
        LogStep.TIMESTAMP: 'time="{value}"',
        LogStep.DATE: 'date="{value}"',
        LogStep.TAG: 'logger="{value}"',
        LogStep.ERROR: 'error="{value}"',
        LogStep.STACKTRACE: 'stacktrace="{value}"',
        LogStep.THREAD: 'thread="{value}"',
        LogStep.LOCATION: 'location="{value}"',
    })

    def prepare(self, step: LogStep, value: str, record: LogRecord) -> str:
        if step is LogStep.LEVEL:
            return value.lower()
        return escape(value)

    def log(self, record: LogRecord) -> list[str]:
        return [" ".join(value for _, value in self.iter_steps(record))]
