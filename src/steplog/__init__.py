"""
steplog: step-pipeline log rendering.

A record is rendered by walking an ordered list of steps (timestamp, level,
tag, message, error, stack trace, ...) through one of eight printers, then
colorized per severity.

    from steplog import LogConfig, LogRecord, LogLevel, LogStep, LogType, get_printer

    printer = get_printer(LogType.FLAT, LogConfig(steps=[LogStep.LEVEL, LogStep.MESSAGE]))
    printer.log(LogRecord.create(LogLevel.INFO, "ready"))
"""

from steplog.records import LogRecord, LogLevel
from steplog.steps import DEFAULT_STEPS, LogStep, LogType
from steplog.config import AdapterConfig, LogConfig, LoggingConfig
from steplog.ansi import AnsiColor, AnsiOutput, LEVEL_COLORS, LEVEL_EMOJIS
from steplog.stacktrace import (
    Location,
    capture_stack,
    extract_location,
    format_stack_trace,
    format_traceback,
)
from steplog.printers import (
    PRINTERS,
    get_printer,
    stringify,
    LogPrinter,
    StepPrinter,
    StepResolver,
    SimplePrinter,
    FlatPrinter,
    FlatStructuredPrinter,
    FmtPrinter,
    PrefixPrinter,
    PrettyPrinter,
    PrettyStructuredPrinter,
    HybridPrinter,
)
from steplog.adapters import LogAdapter, TerminalAdapter, CallbackAdapter, BufferAdapter
from steplog.properties import LogProperties
from steplog.core import Logger, Log, console, get_log

__version__ = "0.1.0"

__all__ = [
    "LogRecord",
    "LogLevel",
    "DEFAULT_STEPS",
    "LogStep",
    "LogType",
    "AdapterConfig",
    "LogConfig",
    "LoggingConfig",
    "AnsiColor",
    "AnsiOutput",
    "LEVEL_COLORS",
    "LEVEL_EMOJIS",
    "Location",
    "capture_stack",
    "extract_location",
    "format_stack_trace",
    "format_traceback",
    "PRINTERS",
    "get_printer",
    "stringify",
    "LogPrinter",
    "StepPrinter",
    "StepResolver",
    "SimplePrinter",
    "FlatPrinter",
    "FlatStructuredPrinter",
    "FmtPrinter",
    "PrefixPrinter",
    "PrettyPrinter",
    "PrettyStructuredPrinter",
    "HybridPrinter",
    "LogAdapter",
    "TerminalAdapter",
    "CallbackAdapter",
    "BufferAdapter",
    "LogProperties",
    "Logger",
    "Log",
    "console",
    "get_log",
]
