"""
Rendering strategies.

    get_printer(LogType.PRETTY, LogConfig(show_emoji=False)).log(record)
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from steplog.config import LogConfig
from steplog.printers.base import LogPrinter, StepPrinter, StepResolver, stringify
from steplog.printers.flat import FlatPrinter
from steplog.printers.flat_structured import FlatStructuredPrinter
from steplog.printers.fmt import FmtPrinter
from steplog.printers.hybrid import HybridPrinter
from steplog.printers.prefix import PrefixPrinter
from steplog.printers.pretty import PrettyPrinter
from steplog.printers.pretty_structured import PrettyStructuredPrinter
from steplog.printers.simple import SimplePrinter
from steplog.steps import LogType

PRINTERS: Mapping[LogType, type[LogPrinter]] = MappingProxyType({
    LogType.SIMPLE: SimplePrinter,
    LogType.FLAT: FlatPrinter,
    LogType.FLAT_STRUCTURED: FlatStructuredPrinter,
    LogType.FMT: FmtPrinter,
    LogType.PREFIX: PrefixPrinter,
    LogType.PRETTY: PrettyPrinter,
    LogType.PRETTY_STRUCTURED: PrettyStructuredPrinter,
    LogType.HYBRID: HybridPrinter,
})

_unmapped = [t.name for t in LogType if t not in PRINTERS]
if _unmapped:
    raise TypeError(f"No printer registered for: {', '.join(_unmapped)}")


def get_printer(
    log_type: LogType | str,
    config: LogConfig | None = None,
    **options: Any,
) -> LogPrinter:
    """Build the printer for a strategy. Extra options go to its constructor."""
    return PRINTERS[LogType.from_name(log_type)](config, **options)


__all__ = [
    "PRINTERS",
    "get_printer",
    "LogPrinter",
    "StepPrinter",
    "StepResolver",
    "stringify",
    "SimplePrinter",
    "FlatPrinter",
    "FlatStructuredPrinter",
    "FmtPrinter",
    "PrefixPrinter",
    "PrettyPrinter",
    "PrettyStructuredPrinter",
    "HybridPrinter",
]
