"""
Flat printer with a structured stack tail.

Example:
    [14:32:05] [ERROR] Request failed [ERROR: timeout]
      ↪ #0      fetch (/app/client.py:42:9)
      ↪ #1      main (/app/main.py:10:5)
"""

from datetime import timedelta
from types import MappingProxyType

from steplog.printers.base import StepPrinter, format_elapsed
from steplog.records import LogRecord
from steplog.stacktrace import DEFAULT_ERROR_METHOD_COUNT
from steplog.steps import LogStep

CONNECTOR = "↪"

# Elapsed marker shown for THREAD; there is no real worker attribution
ELAPSED_MARKER = format_elapsed(timedelta(0))


class FlatStructuredPrinter(StepPrinter):
    """
    Bracketed main line, space separated. STACKTRACE is intercepted and
    rendered as indented connector lines below the main line.
    """

    STEP_FORMATS = MappingProxyType({
        LogStep.TIMESTAMP: "{value}",
        LogStep.DATE: "{value}",
        LogStep.LEVEL: "{value}",
        LogStep.TAG: "{value}",
        LogStep.THREAD: ELAPSED_MARKER,
        LogStep.LOCATION: "LOC:{value}",
        LogStep.MESSAGE: "{value}",
        LogStep.ERROR: "ERROR: {value}",
        LogStep.STACKTRACE: None,
    })

    def __init__(self, config=None, *, method_count: int = 3,
                 error_method_count: int = DEFAULT_ERROR_METHOD_COUNT, **kwargs):
        super().__init__(
            config,
            method_count=method_count,
            error_method_count=error_method_count,
            **kwargs,
        )

    def prepare(self, step: LogStep, value: str, record: LogRecord) -> str:
        if step is LogStep.LEVEL:
            return self.level_color(record)(value)
        return value

    def log(self, record: LogRecord) -> list[str]:
        main: list[str] = []
        tail: list[str] = []
        for step in self.config.steps:
            if step is LogStep.STACKTRACE:
                tail.extend(f"  {CONNECTOR} {line}" for line in self.extract_stack(record))
                continue
            value = self.step_value(step, record)
            if not value:
                continue
            main.append(value if step is LogStep.MESSAGE else f"[{value}]")
        return [" ".join(main), *tail]
