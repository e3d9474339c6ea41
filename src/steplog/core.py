"""
Logger: level-gated dispatch from logging calls to printers and adapters.

A Logger owns one printer and any number of adapters. A call below the
logger's level returns before a record is even built. Otherwise the record
is rendered once and the same lines go to every adapter that accepts it.

Log is a tag-bound front end with per-tag property gates and optional
deferred publishing: with can_publish=False records are held in memory
until publish() is called.
"""

from __future__ import annotations

import threading
from types import TracebackType
from typing import Any, Callable, ClassVar, Iterable, Optional

from steplog.adapters import BufferAdapter, CallbackAdapter, LogAdapter, TerminalAdapter
from steplog.config import AdapterConfig, LogConfig, LoggingConfig
from steplog.printers import LogPrinter, get_printer
from steplog.properties import LogProperties
from steplog.records import LogLevel, LogRecord
from steplog.steps import LogType


class Logger:
    """
    Usage:
        log = Logger(level="debug", log_type=LogType.PRETTY)
        log.info("Payment accepted", tag="Billing")
        log.error("Charge failed", error=exc)
    """

    # Re-export levels for convenience: Logger.DEBUG, etc.
    TRACE = LogLevel.TRACE
    DEBUG = LogLevel.DEBUG
    INFO = LogLevel.INFO
    WARN = LogLevel.WARN
    ERROR = LogLevel.ERROR
    FATAL = LogLevel.FATAL
    OFF = LogLevel.OFF

    def __init__(
        self,
        level: LogLevel | int | str = LogLevel.INFO,
        printer: LogPrinter | None = None,
        log_type: LogType | str = LogType.SIMPLE,
        config: LogConfig | None = None,
        adapters: Iterable[LogAdapter] | None = None,
        output: Callable[[str], None] | None = None,
        name: str = "",
        color: bool = True,
        capture_stack: bool = False,
    ) -> None:
        self._level = LogLevel.from_value(level)
        self.printer = printer or get_printer(log_type, config, color=color)
        self.name = name
        self.capture_stack = capture_stack
        self._adapters: dict[str, LogAdapter] = {}
        self._emit_lock = threading.Lock()

        for adapter in adapters or ():
            self.add_adapter(adapter)
        if output is not None:
            self.add_adapter(CallbackAdapter(output))
        if not self._adapters:
            self.add_adapter(TerminalAdapter())

    @classmethod
    def from_config(cls, config: LoggingConfig) -> "Logger":
        """Build a logger (and seed LogProperties) from a validated config."""
        if config.properties:
            LogProperties.instance().set_properties(config.properties)
        adapters = [
            _build_adapter(name, cfg) for name, cfg in (config.adapters or {}).items()
        ]
        return cls(
            level=config.log_level,
            log_type=config.log_type,
            config=config.config,
            adapters=adapters,
            name=config.name,
            color=config.color,
        )

    # ── Adapter Management ────────────────────────────────────────

    def add_adapter(self, adapter: LogAdapter) -> None:
        """Add or replace an adapter."""
        self._adapters[adapter.name] = adapter

    def remove_adapter(self, name: str) -> LogAdapter | None:
        """Remove an adapter by name. Returns it (already closed) or None."""
        adapter = self._adapters.pop(name, None)
        if adapter:
            adapter.close()
        return adapter

    def get_adapter(self, name: str) -> LogAdapter | None:
        return self._adapters.get(name)

    @property
    def adapters(self) -> dict[str, LogAdapter]:
        return dict(self._adapters)

    # ── Level Management ──────────────────────────────────────────

    @property
    def level(self) -> LogLevel:
        return self._level

    @level.setter
    def level(self, value: LogLevel | int | str) -> None:
        self._level = LogLevel.from_value(value)

    def is_enabled_for(self, level: LogLevel) -> bool:
        """OFF as a logger level silences everything; OFF records never emit."""
        if self._level is LogLevel.OFF or level is LogLevel.OFF:
            return False
        return level.is_enabled_for(self._level)

    # ── Core Logging ──────────────────────────────────────────────

    def log(
        self,
        message: Any,
        *,
        level: LogLevel | int | str = LogLevel.INFO,
        tag: str | None = None,
        error: Any = None,
        stack_trace: str | TracebackType | None = None,
    ) -> None:
        level = LogLevel.from_value(level)
        if not self.is_enabled_for(level):
            return

        record = LogRecord.create(
            level,
            message,
            logger_name=tag or self.name or None,
            error=error,
            stack_trace=stack_trace,
            capture_stack=self.capture_stack,
        )
        self.emit(record)

    def emit(self, record: LogRecord) -> None:
        """Render a prebuilt record and hand the lines to every adapter."""
        if not self.is_enabled_for(record.level):
            return

        lines = self.printer.log(record)
        with self._emit_lock:
            for adapter in self._adapters.values():
                if not adapter.accepts(record):
                    continue
                try:
                    adapter.emit(record, lines)
                except Exception:
                    # Never let adapter failure crash the caller
                    pass

    # ── Convenience Methods ───────────────────────────────────────

    def trace(self, message: Any, **kw: Any) -> None:
        self.log(message, level=LogLevel.TRACE, **kw)

    def debug(self, message: Any, **kw: Any) -> None:
        self.log(message, level=LogLevel.DEBUG, **kw)

    def info(self, message: Any, **kw: Any) -> None:
        self.log(message, level=LogLevel.INFO, **kw)

    def warn(self, message: Any, **kw: Any) -> None:
        self.log(message, level=LogLevel.WARN, **kw)

    warning = warn

    def error(self, message: Any, **kw: Any) -> None:
        self.log(message, level=LogLevel.ERROR, **kw)

    def fatal(self, message: Any, **kw: Any) -> None:
        self.log(message, level=LogLevel.FATAL, **kw)

    # ── Cleanup ───────────────────────────────────────────────────

    def flush(self) -> None:
        for adapter in self._adapters.values():
            adapter.flush()

    def close(self) -> None:
        for adapter in self._adapters.values():
            adapter.close()


console = Logger()


class Log:
    """
    Tag-bound logger.

    Usage:
        log = get_log(PaymentService)
        log.info("charging card")

        deferred = Log("Boot", can_publish=False)
        deferred.info("step 1")      # held in memory
        deferred.publish()           # rendered now, in call order
    """

    _default_logger: ClassVar[Optional[Logger]] = None

    def __init__(
        self,
        tag: str,
        *,
        can_publish: bool = True,
        logger: Logger | None = None,
        properties: LogProperties | None = None,
    ) -> None:
        self.tag = tag
        self.can_publish = can_publish
        self._logger = logger
        self._properties = properties
        self._pending: list[LogRecord] = []
        self._lock = threading.Lock()

    @classmethod
    def set_default_logger(cls, logger: Logger) -> None:
        """Logger used by every Log created without an explicit one."""
        cls._default_logger = logger

    @classmethod
    def clear_default_logger(cls) -> None:
        cls._default_logger = None

    @property
    def logger(self) -> Logger:
        return self._logger or Log._default_logger or console

    @property
    def properties(self) -> LogProperties:
        return self._properties or LogProperties.instance()

    @property
    def pending(self) -> tuple[LogRecord, ...]:
        with self._lock:
            return tuple(self._pending)

    def is_enabled_for(self, level: LogLevel) -> bool:
        return self.properties.allows(self.tag, level)

    def add(
        self,
        level: LogLevel,
        message: Any,
        *,
        error: Any = None,
        stack_trace: str | TracebackType | None = None,
    ) -> None:
        if not self.is_enabled_for(level):
            return

        record = LogRecord.create(
            level,
            message,
            logger_name=self.tag,
            error=error,
            stack_trace=stack_trace,
        )
        if self.can_publish:
            self.logger.emit(record)
        else:
            with self._lock:
                self._pending.append(record)

    def add_all(self, other: "Log") -> None:
        """Take over another Log's pending records; they keep their own tag."""
        records = other.pending
        other.clear()
        with self._lock:
            self._pending.extend(records)

    def clear(self) -> None:
        with self._lock:
            self._pending.clear()

    def publish(self) -> int:
        """Emit pending records in call order. Returns how many were sent."""
        with self._lock:
            records, self._pending = self._pending, []
        logger = self.logger
        for record in records:
            logger.emit(record)
        return len(records)

    def trace(self, message: Any, **kw: Any) -> None:
        self.add(LogLevel.TRACE, message, **kw)

    def debug(self, message: Any, **kw: Any) -> None:
        self.add(LogLevel.DEBUG, message, **kw)

    def info(self, message: Any, **kw: Any) -> None:
        self.add(LogLevel.INFO, message, **kw)

    def warn(self, message: Any, **kw: Any) -> None:
        self.add(LogLevel.WARN, message, **kw)

    def error(self, message: Any, **kw: Any) -> None:
        self.add(LogLevel.ERROR, message, **kw)

    def fatal(self, message: Any, **kw: Any) -> None:
        self.add(LogLevel.FATAL, message, **kw)


def get_log(owner: Any, *, can_publish: bool = True) -> Log:
    """Log tagged with a string, a class name, or an instance's class name."""
    if isinstance(owner, str):
        tag = owner
    elif isinstance(owner, type):
        tag = owner.__name__
    else:
        tag = type(owner).__name__
    return Log(tag, can_publish=can_publish)


# ── Helpers ───────────────────────────────────────────────────────────

def _build_adapter(name: str, cfg: AdapterConfig) -> LogAdapter:
    """Build an adapter from its config entry."""
    if cfg.type == "terminal":
        return TerminalAdapter(name=name, min_level=cfg.level)
    elif cfg.type == "buffer":
        return BufferAdapter(
            name=name,
            min_level=cfg.level,
            buffer_size=cfg.buffer_size or 10000,
        )
    else:
        raise ValueError(f"Unknown adapter type '{cfg.type}' for adapter '{name}'")
