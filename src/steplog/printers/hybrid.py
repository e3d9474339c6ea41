"""Severity-routed printer: compact lines for DEBUG, boxed panels otherwise."""

from __future__ import annotations

from steplog.config import LogConfig
from steplog.printers.base import LogPrinter
from steplog.printers.pretty import PrettyPrinter
from steplog.printers.simple import SimplePrinter
from steplog.records import LogLevel, LogRecord


class HybridPrinter(LogPrinter):
    """Dispatch wrapper; renders nothing itself."""

    def __init__(
        self,
        config: LogConfig | None = None,
        *,
        color: bool = True,
        pretty_printer: LogPrinter | None = None,
        simple_printer: LogPrinter | None = None,
    ):
        super().__init__(config, color=color)
        self.pretty_printer = pretty_printer or PrettyPrinter(self.config, color=color)
        self.simple_printer = simple_printer or SimplePrinter(self.config, color=color)

    def log(self, record: LogRecord) -> list[str]:
        if record.level is LogLevel.DEBUG:
            return self.simple_printer.log(record)
        return self.pretty_printer.log(record)
