"""
Labeled prefix printer.

Example: ⚠️: [14:32:05] [Cache] Entry evicted early

Every physical line of the output is colorized on its own, so embedded
newlines (pretty-printed messages, stack traces) stay readable.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from steplog.ansi import LEVEL_EMOJIS
from steplog.config import LogConfig
from steplog.printers.base import StepPrinter, join_inline
from steplog.records import LogLevel, LogRecord
from steplog.steps import LogStep


class PrefixPrinter(StepPrinter):
    """
    Colon-suffixed level prefix. With emoji enabled the prefix is the
    level emoji; a custom `prefixes` map overrides both.
    """

    MULTILINE = True

    STEP_FORMATS = MappingProxyType({
        LogStep.LEVEL: "{value}:",
        LogStep.MESSAGE: "{value}",
        LogStep.TIMESTAMP: "[{value}]",
        LogStep.DATE: "[{value}]",
        LogStep.TAG: "[{value}]",
        LogStep.ERROR: "ERROR: {value}",
        LogStep.STACKTRACE: "\nStack: {value}",
        LogStep.THREAD: "[{value}]",
        LogStep.LOCATION: "({value})",
    })

    def __init__(
        self,
        config: LogConfig | None = None,
        *,
        prefixes: Mapping[LogLevel, str] | None = None,
        **kwargs,
    ):
        super().__init__(config, **kwargs)
        if prefixes is None:
            prefixes = LEVEL_EMOJIS if self.config.show_emoji else {}
        self.prefixes = MappingProxyType(dict(prefixes))

    def prepare(self, step: LogStep, value: str, record: LogRecord) -> str:
        if step is LogStep.LEVEL:
            return self.prefixes.get(record.level, value)
        return value

    def log(self, record: LogRecord) -> list[str]:
        text = join_inline(value for _, value in self.iter_steps(record))
        color = self.level_color(record)
        return [color(line) for line in text.split("\n")]
