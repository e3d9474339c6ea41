"""
Tests for records and levels.

Covers:
- LogLevel ordering, labels, name/value resolution
- LogRecord factory, immutability, trace normalization
- Memoized location
"""

from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from steplog import stacktrace
from steplog.records import LogLevel, LogRecord


TRACE = "\n".join([
    "#0      fetch_user (/app/services/users.py:42:9)",
    "#1      handle (/app/api/routes.py:17:5)",
])


# ═══════════════════════════════════════════════════════════════════
#  LogLevel
# ═══════════════════════════════════════════════════════════════════

class TestLogLevel:
    def test_levels_ordered(self):
        assert LogLevel.TRACE < LogLevel.DEBUG < LogLevel.INFO < LogLevel.WARN
        assert LogLevel.WARN < LogLevel.ERROR < LogLevel.FATAL < LogLevel.OFF

    def test_python_compatible_values(self):
        assert LogLevel.DEBUG == 10
        assert LogLevel.INFO == 20
        assert LogLevel.WARN == 30
        assert LogLevel.ERROR == 40

    def test_labels(self):
        assert LogLevel.WARN.label == "WARNING"
        assert LogLevel.INFO.label == "INFO"
        assert LogLevel.OFF.label == "OFF"

    def test_is_enabled_for(self):
        assert not LogLevel.DEBUG.is_enabled_for(LogLevel.INFO)
        assert LogLevel.INFO.is_enabled_for(LogLevel.DEBUG)
        assert LogLevel.ERROR.is_enabled_for(LogLevel.ERROR)

    def test_from_name_accepts_member_and_label(self):
        assert LogLevel.from_name("warn") == LogLevel.WARN
        assert LogLevel.from_name("Warning") == LogLevel.WARN
        assert LogLevel.from_name("FATAL") == LogLevel.FATAL

    def test_from_name_invalid(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            LogLevel.from_name("verbose")

    def test_from_value(self):
        assert LogLevel.from_value(40) == LogLevel.ERROR
        assert LogLevel.from_value("debug") == LogLevel.DEBUG
        with pytest.raises(ValueError):
            LogLevel.from_value(11)
        with pytest.raises(TypeError):
            LogLevel.from_value(1.5)


# ═══════════════════════════════════════════════════════════════════
#  LogRecord
# ═══════════════════════════════════════════════════════════════════

class TestLogRecord:
    def test_create_basic(self):
        record = LogRecord.create("info", "hello")
        assert record.level is LogLevel.INFO
        assert record.message == "hello"
        assert record.logger_name is None
        assert record.error is None
        assert record.stack_trace is None
        assert record.timestamp.tzinfo is not None

    def test_immutable(self):
        record = LogRecord.create(LogLevel.INFO, "test")
        with pytest.raises(AttributeError):
            record.message = "changed"
        with pytest.raises(AttributeError):
            record.timestamp = datetime.now(timezone.utc)

    def test_str(self):
        assert str(LogRecord.create(LogLevel.WARN, "Token expired")) == "[WARNING] Token expired"

    def test_explicit_timestamp_kept(self):
        ts = datetime(2025, 1, 1, 12, tzinfo=timezone.utc)
        record = LogRecord.create(LogLevel.INFO, "x", timestamp=ts)
        assert record.timestamp == ts

    def test_capture_stack_points_at_caller(self):
        record = LogRecord.create(LogLevel.INFO, "here", capture_stack=True)
        assert record.location is not None
        assert record.location.function == "test_capture_stack_points_at_caller"

    def test_exception_traceback_used(self):
        def explode():
            raise RuntimeError("boom")

        try:
            explode()
        except RuntimeError as exc:
            record = LogRecord.create(LogLevel.ERROR, "failed", error=exc)

        assert record.stack_trace is not None
        assert record.location.function == "explode"

    def test_traceback_object_converted(self):
        try:
            {}["missing"]
        except KeyError as exc:
            record = LogRecord.create(LogLevel.ERROR, "lookup", stack_trace=exc.__traceback__)

        assert isinstance(record.stack_trace, str)
        assert record.stack_trace.startswith("#0")


class TestLocation:
    def test_location_from_trace(self):
        record = LogRecord.create(LogLevel.INFO, "x", stack_trace=TRACE)
        location = record.location
        assert location.function == "fetch_user"
        assert location.path == "/app/services/users.py"
        assert location.line == 42
        assert location.column == 9
        assert location.summary == "users.py:42"
        assert str(location) == "fetch_user (/app/services/users.py:42:9)\nusers.py:42"

    def test_location_none_without_trace(self):
        assert LogRecord.create(LogLevel.INFO, "x").location is None

    def test_location_none_for_unparsable_trace(self):
        record = LogRecord.create(LogLevel.INFO, "x", stack_trace="<asynchronous suspension>")
        assert record.location is None

    def test_location_memoized(self):
        record = LogRecord.create(LogLevel.INFO, "x", stack_trace=TRACE)
        with patch.object(stacktrace, "extract_location", wraps=stacktrace.extract_location) as spy:
            first = record.location
            second = record.location
        assert first is second
        assert spy.call_count == 1
