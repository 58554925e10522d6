from __future__ import annotations

import io
import logging
import threading
from collections.abc import Iterator
from datetime import datetime, timezone

import pytest

import pylogswing.logger as logger_module
from pylogswing import (
    DUAL_TONE,
    TRACE_LEVEL_NUM,
    Config,
    ConfigValidationError,
    CustomFormat,
    InlineGradient,
    JsonFormat,
    LoggerAlreadyInitializedError,
    LogRecord,
    LogWriter,
    MultiLineGradient,
    RecordFormatError,
    SimpleFormat,
    SwingHandler,
    SwingLogger,
    get_logger,
)
from pylogswing.formats import format_timestamp
from pylogswing.logger import level_from_stdlib
from pylogswing.types import ASCENDING, LEVELS

FIXED_TIMESTAMP_NS = (
    int(datetime(2022, 7, 31, 20, 25, 31, tzinfo=timezone.utc).timestamp()) * 1_000_000_000
    + 108_645_580
)


def make_record(level: str = "INFO", message: str = "baz", target: str = "main") -> LogRecord:
    return LogRecord(timestamp_ns=FIXED_TIMESTAMP_NS, level=level, target=target, message=message)  # type: ignore[arg-type]


def plain_logger(**overrides: object) -> tuple[SwingLogger, io.StringIO, io.StringIO]:
    out = io.StringIO()
    err = io.StringIO()
    overrides.setdefault("color_format", None)
    return SwingLogger(stdout=out, stderr=err, **overrides), out, err


class BrokenStream(io.StringIO):
    def write(self, text: str) -> int:
        raise OSError("stream closed by peer")


@pytest.fixture(autouse=True)
def reset_global_logger() -> Iterator[None]:
    root = logging.getLogger()
    previous_level = root.level
    logger_module._global_logger = None
    yield
    logger_module._global_logger = None
    for handler in list(root.handlers):
        if isinstance(handler, SwingHandler):
            root.removeHandler(handler)
    root.setLevel(previous_level)


def test_simple_format_matches_wire_format() -> None:
    assert SimpleFormat().format(make_record()) == "2022-07-31T20:25:31.108645580Z [main] INFO - baz"


def test_json_format_matches_wire_format() -> None:
    assert JsonFormat().format(make_record()) == (
        '{"time":"2022-07-31T20:25:31.108645580Z","level":"INFO","target":"main","message":"baz"}'
    )


def test_json_format_keeps_unicode_and_escapes_quotes() -> None:
    line = JsonFormat().format(make_record(message='héllo "x"\n'))
    assert '"message":"héllo \\"x\\"\\n"' in line
    assert "\n" not in line


def test_formats_return_non_empty_for_empty_record() -> None:
    for formatter in (SimpleFormat(), JsonFormat()):
        assert formatter.format(make_record(message="", target="")) != ""


def test_custom_format_formats_correctly() -> None:
    cases = [
        (lambda r: "", ""),
        (lambda r: f"{r.level} {r.message}", "INFO foo"),
        (lambda r: f"{r.level} [{r.target}] {r.message}", "INFO [test] foo"),
    ]
    record = make_record(message="foo", target="test")
    for func, expected in cases:
        assert CustomFormat(func).format(record) == expected


def test_custom_format_errors_propagate() -> None:
    formatter = CustomFormat(lambda r: str(1 / 0))
    with pytest.raises(ZeroDivisionError):
        formatter.format(make_record())


def test_format_timestamp_pads_nanoseconds() -> None:
    assert format_timestamp(1_000_000_007) == "1970-01-01T00:00:01.000000007Z"


def test_format_timestamp_out_of_range_raises_record_format_error() -> None:
    with pytest.raises(RecordFormatError):
        format_timestamp(10**30)


def test_record_timestamp_property_is_utc() -> None:
    moment = make_record().timestamp
    assert moment.tzinfo is timezone.utc
    assert moment.microsecond == 108_645


def test_config_defaults_and_normalization() -> None:
    config = Config()
    assert config.level == "INFO"
    assert config.use_stderr is True
    assert Config(level="warning").level == "WARN"
    assert Config(level=" off ").level == "OFF"
    assert Config(record_format="json").record_format.format(make_record()).startswith("{")
    assert isinstance(Config(record_format=lambda r: "x").record_format, CustomFormat)
    assert Config(theme="dual_tone").theme is DUAL_TONE
    assert Config(color_format="none").color_format == Config(color_format=None).color_format


@pytest.mark.parametrize(
    "field, value",
    [
        ("level", "loud"),
        ("record_format", "xml"),
        ("record_format", 42),
        ("color_format", "rainbow"),
        ("theme", "neon"),
        ("theme", object()),
    ],
)
def test_config_rejects_invalid_values(field: str, value: object) -> None:
    with pytest.raises(ConfigValidationError):
        Config(**{field: value})


@pytest.mark.parametrize("steps", [0, -3, True, 2.5])
def test_gradient_steps_must_be_positive_int(steps: object) -> None:
    with pytest.raises(ValueError):
        InlineGradient(steps)  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        MultiLineGradient(steps)  # type: ignore[arg-type]


def test_writer_splits_streams_when_use_stderr() -> None:
    out = io.StringIO()
    err = io.StringIO()
    writer = LogWriter(use_stderr=True, stdout=out, stderr=err)
    for level in LEVELS:
        assert writer.write(level, level.lower())
    assert out.getvalue() == "trace\ndebug\ninfo\n"
    assert err.getvalue() == "warn\nerror\n"


def test_writer_sends_everything_to_stdout_without_use_stderr() -> None:
    out = io.StringIO()
    err = io.StringIO()
    writer = LogWriter(use_stderr=False, stdout=out, stderr=err)
    for level in LEVELS:
        writer.write(level, "")
    assert out.getvalue() == "\n" * len(LEVELS)
    assert err.getvalue() == ""


def test_writer_reports_failed_write() -> None:
    errors: list[str] = []
    writer = LogWriter(use_stderr=False, stdout=BrokenStream(), on_error=errors.append)
    assert writer.write("INFO", "lost") is False
    assert len(errors) == 1
    assert "stream closed by peer" in errors[0]


def test_writer_uses_current_sys_streams(capsys: pytest.CaptureFixture[str]) -> None:
    writer = LogWriter(use_stderr=True)
    writer.write("INFO", "to stdout")
    writer.write("ERROR", "to stderr")
    captured = capsys.readouterr()
    assert captured.out == "to stdout\n"
    assert captured.err == "to stderr\n"


def test_logger_routes_levels_to_streams() -> None:
    logger, out, err = plain_logger(level="TRACE", use_stderr=True)
    logger.trace("t")
    logger.debug("d")
    logger.info("i")
    logger.warn("w")
    logger.error("e")
    assert [line.rsplit(" - ", 1)[1] for line in out.getvalue().splitlines()] == ["t", "d", "i"]
    assert [line.rsplit(" - ", 1)[1] for line in err.getvalue().splitlines()] == [
        "w\x1b[0m",
        "e\x1b[0m",
    ]
    assert all(line.startswith("\x1b[1m") for line in err.getvalue().splitlines())


def test_logger_without_use_stderr_writes_only_stdout() -> None:
    logger, out, err = plain_logger(level="TRACE", use_stderr=False)
    for level in LEVELS:
        assert logger.log("x", level)
    assert len(out.getvalue().splitlines()) == len(LEVELS)
    assert err.getvalue() == ""


def test_logger_filters_levels_below_threshold() -> None:
    logger, out, err = plain_logger(level="WARN")
    assert not logger.enabled("TRACE")
    assert not logger.enabled("DEBUG")
    assert not logger.enabled("INFO")
    assert logger.enabled("WARN")
    assert logger.enabled("ERROR")
    assert logger.info("hidden") is False
    assert logger.log_record(make_record("DEBUG")) is False
    assert out.getvalue() == ""
    assert logger.error("shown") is True
    assert "shown" in err.getvalue()


def test_logger_with_off_level_renders_nothing() -> None:
    logger, out, err = plain_logger(level="OFF")
    for level in LEVELS:
        assert not logger.enabled(level)
        assert logger.log("x", level) is False
    assert not logger.enabled("OFF")
    assert out.getvalue() == ""
    assert err.getvalue() == ""


def test_logger_filtered_records_do_not_advance_gradient() -> None:
    logger, _, _ = plain_logger(level="WARN", color_format=MultiLineGradient(5))
    logger.info("skipped")
    logger.info("skipped")
    cursors = logger.painter.cursors
    assert cursors is not None
    assert cursors.state("INFO") == (0, ASCENDING)


def test_logger_writes_exact_simple_line() -> None:
    logger, out, _ = plain_logger()
    assert logger.log_record(make_record())
    assert out.getvalue() == "2022-07-31T20:25:31.108645580Z [main] INFO - baz\n"


def test_logger_handles_empty_record() -> None:
    logger, out, _ = plain_logger(color_format=InlineGradient(4))
    assert logger.log_record(make_record(message="", target=""))
    assert out.getvalue().endswith("[] INFO - \n")


def test_logger_drops_record_with_bad_timestamp_and_continues() -> None:
    logger, out, err = plain_logger()
    bad = LogRecord(timestamp_ns=10**30, level="INFO", target="main", message="bad")
    assert logger.log_record(bad) is False
    assert "[pylogswing] Dropped INFO record from 'main'" in err.getvalue()
    assert logger.log_record(make_record()) is True
    assert out.getvalue() == "2022-07-31T20:25:31.108645580Z [main] INFO - baz\n"


def test_logger_drops_record_when_custom_formatter_fails() -> None:
    def flaky(record: LogRecord) -> str:
        if record.message == "boom":
            raise RuntimeError("formatter exploded")
        return record.message

    logger, out, err = plain_logger(record_format=flaky)
    assert logger.info("boom") is False
    assert "formatter exploded" in err.getvalue()
    assert logger.info("fine") is True
    assert out.getvalue() == "fine\n"


def test_logger_reports_write_failure_without_raising() -> None:
    err = io.StringIO()
    logger = SwingLogger(stdout=BrokenStream(), stderr=err, color_format=None, use_stderr=False)
    assert logger.info("lost") is False
    assert "[pylogswing] Failed to write INFO log line" in err.getvalue()


def test_logger_reports_empty_palette_once() -> None:
    class NoInfoTheme:
        def colors_for(self, level: str) -> tuple:
            return () if level == "INFO" else DUAL_TONE.colors_for(level)

    logger, out, err = plain_logger(theme=NoInfoTheme(), color_format="solid")
    logger.info("one")
    logger.info("two")
    assert err.getvalue().count("NoInfoTheme") == 1
    assert "\x1b[" not in out.getvalue()


def test_logger_defaults_to_sys_streams(capsys: pytest.CaptureFixture[str]) -> None:
    logger = SwingLogger(color_format=None)
    logger.info("hello")
    logger.error("oops")
    captured = capsys.readouterr()
    assert captured.out.endswith("[main] INFO - hello\n")
    assert "[main] ERROR - oops" in captured.err


def test_concurrent_multi_line_renders_advance_cursor_exactly() -> None:
    threads_count = 6
    renders_per_thread = 200
    logger, out, _ = plain_logger(level="TRACE", color_format=MultiLineGradient(9))
    barrier = threading.Barrier(threads_count)

    def worker() -> None:
        barrier.wait()
        for idx in range(renders_per_thread):
            logger.debug(f"msg {idx}")

    workers = [threading.Thread(target=worker) for _ in range(threads_count)]
    for thread in workers:
        thread.start()
    for thread in workers:
        thread.join()

    lines = out.getvalue().splitlines()
    assert len(lines) == threads_count * renders_per_thread
    assert all(line.endswith("\x1b[0m") for line in lines)
    total = threads_count * renders_per_thread
    cursors = logger.painter.cursors
    assert cursors is not None
    position = total % 18
    expected = (position, ASCENDING) if position < 9 else (18 - position, "DESCENDING")
    assert cursors.state("DEBUG") == expected


def test_init_registers_logger_once() -> None:
    logger = SwingLogger(color_format=None)
    assert logger.init() is logger
    assert get_logger() is logger
    with pytest.raises(LoggerAlreadyInitializedError):
        SwingLogger().init()


def test_get_logger_registers_default_logger() -> None:
    first = get_logger()
    assert get_logger() is first
    assert first.config == Config()
    assert isinstance(first.handler, SwingHandler)


def test_stdlib_logging_is_routed_through_handler() -> None:
    out = io.StringIO()
    err = io.StringIO()
    SwingLogger(stdout=out, stderr=err, color_format=None, level="DEBUG").init()
    logging.getLogger("app.db").warning("disk %s", "full")
    logging.getLogger("app.web").debug("request served")
    logging.getLogger("app.web").log(TRACE_LEVEL_NUM, "filtered out")
    assert "[app.db] WARN - disk full" in err.getvalue()
    assert "[app.web] DEBUG - request served" in out.getvalue()
    assert "filtered out" not in out.getvalue()


def test_stdlib_exception_text_is_appended() -> None:
    out = io.StringIO()
    logger = SwingLogger(stdout=out, color_format=None, use_stderr=False)
    handler = SwingHandler(logger)
    stdlib_logger = logging.getLogger("pylogswing.tests.exc")
    stdlib_logger.propagate = False
    stdlib_logger.addHandler(handler)
    try:
        try:
            raise KeyError("missing")
        except KeyError:
            stdlib_logger.exception("lookup failed")
    finally:
        stdlib_logger.removeHandler(handler)
        stdlib_logger.propagate = True
    text = out.getvalue()
    assert "ERROR - lookup failed" in text
    assert "KeyError: 'missing'" in text


def test_level_from_stdlib_mapping() -> None:
    assert level_from_stdlib(TRACE_LEVEL_NUM) == "TRACE"
    assert level_from_stdlib(logging.DEBUG) == "DEBUG"
    assert level_from_stdlib(logging.INFO) == "INFO"
    assert level_from_stdlib(logging.WARNING) == "WARN"
    assert level_from_stdlib(logging.ERROR) == "ERROR"
    assert level_from_stdlib(logging.CRITICAL) == "ERROR"


class BinaryOnlyStream(io.BytesIO):
    def write(self, data: bytes) -> int:  # type: ignore[override]
        if isinstance(data, str):
            raise TypeError("a bytes-like object is required, not 'str'")
        return super().write(data)


def test_logger_contains_unexpected_write_errors() -> None:
    err = io.StringIO()
    logger = SwingLogger(stdout=BinaryOnlyStream(), stderr=err, color_format=None)  # type: ignore[arg-type]
    assert logger.info("x") is False
    assert "[pylogswing] Failed to write INFO log line: TypeError" in err.getvalue()
    assert logger.error("still works") is True
    assert "still works" in err.getvalue()


def test_diagnostics_share_the_write_lock() -> None:
    held: list[bool] = []
    writer: LogWriter

    class LockCheckingStream(io.StringIO):
        def write(self, text: str) -> int:
            held.append(writer._write_lock.locked())
            return super().write(text)

    err = LockCheckingStream()
    writer = LogWriter(use_stderr=True, stderr=err)
    writer.write("ERROR", "line")
    writer.write_diagnostic("[pylogswing] note")
    assert held == [True, True]
    assert err.getvalue() == "line\n[pylogswing] note\n"


def test_logger_diagnostics_go_through_writer() -> None:
    logger, _, err = plain_logger()
    logger.log_record(LogRecord(timestamp_ns=10**30, level="INFO", target="main", message="bad"))
    assert err.getvalue().startswith("[pylogswing] Dropped INFO record")
    assert err.getvalue().endswith("\n")


def test_logger_renders_uncolored_when_theme_raises() -> None:
    class InfoOnlyTheme:
        def colors_for(self, level: str) -> tuple:
            return {"INFO": DUAL_TONE.colors_for("INFO")}[level]

    logger, out, err = plain_logger(level="TRACE", theme=InfoOnlyTheme(), color_format="solid")
    assert logger.debug("hello") is True
    assert logger.debug("again") is True
    lines = out.getvalue().splitlines()
    assert lines[0].endswith("[main] DEBUG - hello")
    assert "\x1b[" not in out.getvalue()
    assert err.getvalue().count("KeyError") == 1
    assert logger.info("colored") is True
    assert out.getvalue().splitlines()[-1].startswith("\x1b[38;2;")


def test_logger_normalizes_level_names() -> None:
    logger, out, err = plain_logger(level="TRACE")
    assert logger.enabled("info")
    assert logger.log("lower", "info") is True  # type: ignore[arg-type]
    assert logger.log("alias", "warning") is True  # type: ignore[arg-type]
    assert out.getvalue().endswith("[main] INFO - lower\n")
    assert "[main] WARN - alias" in err.getvalue()
    assert logger.log_record(make_record(level="debug")) is True
    assert "[main] DEBUG - baz" in out.getvalue()


def test_logger_rejects_unknown_and_off_record_levels() -> None:
    logger, out, _ = plain_logger(level="TRACE")
    assert not logger.enabled("verbose")
    with pytest.raises(ConfigValidationError):
        logger.log("x", "verbose")  # type: ignore[arg-type]
    with pytest.raises(ConfigValidationError):
        logger.log("x", "OFF")  # type: ignore[arg-type]
    assert out.getvalue() == ""
