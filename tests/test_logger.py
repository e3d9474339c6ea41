"""
Tests for the dispatch layer.

Covers:
- Logger level filtering, adapters, error isolation
- Terminal routing (stdout vs stderr)
- Buffer adapter ring behaviour
- Construction from LoggingConfig
- Tag-bound Log: property gates, deferred publishing, merging
- LogProperties registry
"""

import pytest

from steplog import (
    BufferAdapter,
    CallbackAdapter,
    Log,
    LogAdapter,
    LogConfig,
    Logger,
    LoggingConfig,
    LogLevel,
    LogProperties,
    LogStep,
    LogType,
    TerminalAdapter,
    console,
    get_log,
)


@pytest.fixture(autouse=True)
def clean_state():
    """Fresh property registry and no default logger for every test."""
    LogProperties.reset()
    Log.clear_default_logger()
    yield
    LogProperties.reset()
    Log.clear_default_logger()


def make_logger(level=LogLevel.TRACE, steps=(LogStep.MESSAGE,), **kwargs):
    lines = []
    logger = Logger(
        level=level,
        log_type=LogType.FMT,
        config=LogConfig(steps=steps),
        output=lines.append,
        **kwargs,
    )
    return logger, lines


# ═══════════════════════════════════════════════════════════════════
#  Logger
# ═══════════════════════════════════════════════════════════════════

class TestLogger:
    def test_level_filtering(self):
        logger, lines = make_logger(level="warn")
        logger.debug("d")
        logger.info("i")
        logger.warn("w")
        logger.error("e")
        assert lines == ['msg="w"', 'msg="e"']

    def test_warning_alias(self):
        logger, lines = make_logger()
        logger.warning("careful")
        assert lines == ['msg="careful"']

    def test_off_silences(self):
        logger, lines = make_logger(level=LogLevel.OFF)
        logger.fatal("nope")
        assert lines == []

    def test_off_records_never_emit(self):
        logger, lines = make_logger()
        logger.log("hidden", level=LogLevel.OFF)
        assert lines == []

    def test_level_setter(self):
        logger, lines = make_logger()
        logger.level = "error"
        assert logger.level is LogLevel.ERROR
        logger.info("dropped")
        assert lines == []

    def test_level_reexports(self):
        assert Logger.DEBUG is LogLevel.DEBUG
        assert Logger.OFF is LogLevel.OFF

    def test_tag_and_name(self):
        steps = (LogStep.TAG, LogStep.MESSAGE)
        logger, lines = make_logger(steps=steps, name="Svc")
        logger.info("a")
        logger.info("b", tag="Auth")
        assert lines == ['logger="Svc" msg="a"', 'logger="Auth" msg="b"']

    def test_error_carries_traceback(self):
        logger, lines = make_logger(steps=(LogStep.ERROR, LogStep.STACKTRACE))
        try:
            raise ValueError("bad input")
        except ValueError as exc:
            logger.error("failed", error=exc)
        assert lines[0].startswith('error="bad input" stacktrace="#0')
        assert "test_error_carries_traceback" in lines[0]

    def test_capture_stack_location(self):
        logger, lines = make_logger(steps=(LogStep.LOCATION,), capture_stack=True)
        logger.info("here")
        assert lines[0].startswith('location="test_logger.py:')

    def test_multiline_output_split_across_lines(self):
        lines = []
        logger = Logger(
            level=LogLevel.INFO,
            log_type=LogType.PRETTY,
            config=LogConfig(steps=[LogStep.MESSAGE]),
            output=lines.append,
            color=False,
        )
        logger.info("boxed")
        assert len(lines) == 3
        assert lines[1] == "│ 💬 MESSAGE: boxed"

    def test_custom_printer(self):
        from steplog import FlatPrinter

        lines = []
        printer = FlatPrinter(LogConfig(steps=[LogStep.LEVEL, LogStep.MESSAGE]), color=False)
        logger = Logger(printer=printer, output=lines.append)
        logger.info("flat")
        assert lines == ["[INFO] flat"]


class TestAdapters:
    def test_default_is_terminal(self):
        logger = Logger()
        assert isinstance(logger.get_adapter("terminal"), TerminalAdapter)

    def test_broken_adapter_isolated(self):
        class Broken(LogAdapter):
            def emit(self, record, lines):
                raise RuntimeError("disk full")

        lines = []
        logger = Logger(
            log_type=LogType.FMT,
            config=LogConfig(steps=[LogStep.MESSAGE]),
            adapters=[Broken("broken"), CallbackAdapter(lines.append)],
        )
        logger.info("still here")
        assert lines == ['msg="still here"']

    def test_adapter_min_level(self):
        errors = []
        logger, lines = make_logger()
        logger.add_adapter(CallbackAdapter(errors.append, name="errors", min_level=LogLevel.ERROR))
        logger.info("a")
        logger.error("b")
        assert lines == ['msg="a"', 'msg="b"']
        assert errors == ['msg="b"']

    def test_remove_adapter(self):
        logger, lines = make_logger()
        removed = logger.remove_adapter("callback")
        assert isinstance(removed, CallbackAdapter)
        assert logger.remove_adapter("callback") is None
        assert "callback" not in logger.adapters

    def test_terminal_routing(self, capsys):
        logger = Logger(log_type=LogType.FMT, config=LogConfig(steps=[LogStep.MESSAGE]))
        logger.info("to stdout")
        logger.error("to stderr")
        captured = capsys.readouterr()
        assert captured.out == 'msg="to stdout"\n'
        assert captured.err == 'msg="to stderr"\n'

    def test_console(self, capsys):
        console.info("console ready")
        assert "console ready" in capsys.readouterr().out

    def test_buffer_ring(self):
        buffer = BufferAdapter(buffer_size=3)
        logger = Logger(
            log_type=LogType.FMT,
            config=LogConfig(steps=[LogStep.MESSAGE]),
            adapters=[buffer],
        )
        for i in range(5):
            logger.info(f"m{i}")
        assert buffer.count == 3
        assert buffer.maxlen == 3
        assert buffer.get_recent() == ['msg="m2"', 'msg="m3"', 'msg="m4"']
        assert buffer.get_recent(1) == ['msg="m4"']
        assert buffer.get_recent(0) == []
        buffer.clear()
        assert buffer.count == 0


class TestFromConfig:
    YAML = """
level: debug
type: fmt
config:
  steps: [level, message]
adapters:
  recent:
    type: buffer
    buffer_size: 50
properties:
  logging.enabled.Quiet: "false"
"""

    def test_build(self):
        logger = Logger.from_config(LoggingConfig.from_yaml_string(self.YAML))
        assert logger.level is LogLevel.DEBUG
        buffer = logger.get_adapter("recent")
        assert isinstance(buffer, BufferAdapter)
        assert buffer.maxlen == 50
        logger.debug("hello")
        assert buffer.get_recent() == ['level=debug msg="hello"']

    def test_properties_seeded(self):
        Logger.from_config(LoggingConfig.from_yaml_string(self.YAML))
        assert not LogProperties.instance().is_tag_enabled("Quiet")

    def test_unknown_adapter_type(self):
        config = LoggingConfig.from_dict({"adapters": {"db": {"type": "database"}}})
        with pytest.raises(ValueError, match="Unknown adapter type"):
            Logger.from_config(config)


# ═══════════════════════════════════════════════════════════════════
#  Log
# ═══════════════════════════════════════════════════════════════════

class TestLog:
    def test_publishes_immediately(self):
        logger, lines = make_logger(steps=(LogStep.TAG, LogStep.MESSAGE))
        Log("Auth", logger=logger).info("signed in")
        assert lines == ['logger="Auth" msg="signed in"']

    def test_deferred_publish(self):
        logger, lines = make_logger()
        log = Log("Boot", can_publish=False, logger=logger)
        log.info("one")
        log.warn("two")
        assert lines == []
        assert len(log.pending) == 2
        assert log.publish() == 2
        assert lines == ['msg="one"', 'msg="two"']
        assert log.pending == ()
        assert log.publish() == 0

    def test_publish_respects_logger_level(self):
        logger, lines = make_logger(level=LogLevel.WARN)
        log = Log("Boot", can_publish=False, logger=logger)
        log.debug("quiet")
        log.error("loud")
        log.publish()
        assert lines == ['msg="loud"']

    def test_add_all(self):
        logger, lines = make_logger(steps=(LogStep.TAG, LogStep.MESSAGE))
        parent = Log("Parent", can_publish=False, logger=logger)
        child = Log("Child", can_publish=False, logger=logger)
        parent.info("p")
        child.info("c")
        parent.add_all(child)
        assert child.pending == ()
        parent.publish()
        assert lines == ['logger="Parent" msg="p"', 'logger="Child" msg="c"']

    def test_clear(self):
        logger, lines = make_logger()
        log = Log("Boot", can_publish=False, logger=logger)
        log.info("x")
        log.clear()
        assert log.publish() == 0

    def test_default_logger(self):
        logger, lines = make_logger()
        Log.set_default_logger(logger)
        Log("Any").info("routed")
        assert lines == ['msg="routed"']

    def test_falls_back_to_console(self):
        assert Log("Any").logger is console

    def test_disabled_tag(self):
        logger, lines = make_logger()
        LogProperties.instance().set_property("logging.enabled.Noisy", "FALSE")
        log = Log("Noisy", logger=logger)
        log.fatal("x")
        assert lines == []
        Log("Other", logger=logger).info("y")
        assert lines == ['msg="y"']

    def test_tag_level(self):
        logger, lines = make_logger()
        LogProperties.instance().set_property("logging.level.Cache", "error")
        log = Log("Cache", logger=logger)
        log.info("miss")
        log.error("corrupt")
        assert lines == ['msg="corrupt"']

    def test_explicit_properties(self):
        logger, lines = make_logger()
        props = LogProperties()
        props.set_property("logging.enabled.Scoped", "false")
        Log("Scoped", logger=logger, properties=props).info("x")
        Log("Scoped", logger=logger).info("y")
        assert lines == ['msg="y"']

    def test_get_log_tags(self):
        class PaymentService:
            pass

        assert get_log("Jobs").tag == "Jobs"
        assert get_log(PaymentService).tag == "PaymentService"
        assert get_log(PaymentService()).tag == "PaymentService"
        assert get_log("Jobs", can_publish=False).can_publish is False


# ═══════════════════════════════════════════════════════════════════
#  LogProperties
# ═══════════════════════════════════════════════════════════════════

class TestLogProperties:
    def test_singleton(self):
        assert LogProperties.instance() is LogProperties.instance()

    def test_reset(self):
        first = LogProperties.instance()
        LogProperties.reset()
        assert LogProperties.instance() is not first

    def test_overwrite_flag(self):
        props = LogProperties()
        props.set_property("a", "1")
        props.set_property("a", "2", overwrite=False)
        assert props.get_property("a") == "1"
        props.set_property("a", "3")
        assert props.get_property("a") == "3"

    def test_set_properties(self):
        props = LogProperties()
        props.set_properties({"x": "1", "y": "2"})
        assert props.get_property("y") == "2"
        assert props.get_property("z") is None

    def test_snapshot_read_only(self):
        props = LogProperties()
        props.set_property("k", "v")
        snapshot = props.as_dict()
        with pytest.raises(TypeError):
            snapshot["k"] = "w"
        props.clear()
        assert snapshot["k"] == "v"
        assert props.get_property("k") is None

    def test_invalid_level_ignored(self):
        props = LogProperties()
        props.set_property("logging.level.Db", "loud")
        assert props.tag_level("Db") is None
        assert props.allows("Db", LogLevel.TRACE)

    def test_allows(self):
        props = LogProperties()
        props.set_property("logging.level.Db", "warning")
        assert not props.allows("Db", LogLevel.INFO)
        assert props.allows("Db", LogLevel.WARN)
        assert props.allows("Other", LogLevel.TRACE)
