"""Tests for structured logging and the log_result tap."""

from __future__ import annotations

import json
from io import StringIO

import pytest

from result_pattern import Fail, Ok, get_logger, log_result
from result_pattern.config import ResultSettings
from result_pattern.logger import (
    BoundLogger,
    ConsoleRenderer,
    JsonRenderer,
    LogEntry,
    NoOpRenderer,
    configure_from_settings,
    configure_logging,
    log_context,
)


def test_console_line_shape(log_output: StringIO) -> None:
    get_logger("signup").info("validating form", fields=2, strict=True)

    line = log_output.getvalue().strip()
    assert '[info] validating form fields=2 logger="signup" strict=true' in line


def test_bind_returns_new_logger(log_output: StringIO) -> None:
    base = get_logger("svc")
    bound = base.bind(request_id="abc")

    assert bound is not base
    assert "request_id" not in base.context
    bound.warning("slow")
    assert 'request_id="abc"' in log_output.getvalue()

    assert "request_id" not in bound.unbind("request_id").context


def test_level_filtering_follows_configuration() -> None:
    buf = StringIO()
    log = get_logger()  # created before configuration
    configure_logging("console", "ERROR", output=buf, colors=False)
    try:
        log.warning("dropped")
        log.error("kept")
    finally:
        configure_logging("none")

    assert "dropped" not in buf.getvalue()
    assert "kept" in buf.getvalue()


def test_explicit_logger_level_and_renderer() -> None:
    buf = StringIO()
    log = BoundLogger(renderer=ConsoleRenderer(output=buf, colors=False, show_timestamp=False), level=30)

    log.info("hidden")
    log.warning("shown", n=1)

    assert buf.getvalue() == "[warning] shown n=1\n"


def test_log_context_scopes_values(log_output: StringIO) -> None:
    log = get_logger()
    with log_context(job="import"):
        log.info("inside")
    log.info("outside")

    inside, outside = log_output.getvalue().splitlines()
    assert 'job="import"' in inside
    assert "job" not in outside


def test_exception_includes_traceback(log_output: StringIO) -> None:
    try:
        raise ValueError("bad input")
    except ValueError:
        get_logger().exception("parse failed")

    out = log_output.getvalue()
    assert "[error] parse failed" in out
    assert "ValueError: bad input" in out


def test_json_renderer(json_log_output: StringIO) -> None:
    get_logger("svc").info("event", payload={"a": 1}, obj=object())

    record = json.loads(json_log_output.getvalue())
    assert record["level"] == "info"
    assert record["event"] == "event"
    assert record["logger"] == "svc"
    assert record["payload"] == {"a": 1}
    assert record["obj"].startswith("<object object")


def test_noop_renderer_discards() -> None:
    NoOpRenderer().render(LogEntry(0.0, "info", "nothing", {}))


def test_configure_logging_rejects_unknown_format() -> None:
    with pytest.raises(ValueError, match="Unknown format"):
        configure_logging("xml")


def test_configure_from_settings() -> None:
    settings = ResultSettings(logging={"format": "json", "level": "debug"})
    buf = StringIO()
    try:
        renderer = configure_from_settings(settings, output=buf)
        assert isinstance(renderer, JsonRenderer)
        get_logger().debug("configured")
    finally:
        configure_logging("none")

    assert json.loads(buf.getvalue())["event"] == "configured"


def test_configure_from_settings_debug_forces_debug_level() -> None:
    settings = ResultSettings(debug=True, logging={"format": "console", "colors": False})
    assert settings.logging.level == "WARNING"
    buf = StringIO()
    try:
        configure_from_settings(settings, output=buf)
        get_logger("startup").debug("settings loaded")
    finally:
        configure_logging("none")

    assert "[debug] settings loaded" in buf.getvalue()


def test_configure_from_settings_without_debug_keeps_level() -> None:
    buf = StringIO()
    try:
        configure_from_settings(ResultSettings(logging={"format": "console", "colors": False}), output=buf)
        get_logger().debug("hidden")
        get_logger().warning("shown")
    finally:
        configure_logging("none")

    assert "hidden" not in buf.getvalue()
    assert "shown" in buf.getvalue()


# ═════════════════════════════════════════════════════════════════════════════
# log_result
# ═════════════════════════════════════════════════════════════════════════════


def test_log_result_ok(log_output: StringIO) -> None:
    result = Ok(42)
    assert log_result(result, event="compute") is result
    assert "[info] compute ok=true value=42" in log_output.getvalue()


def test_log_result_fail(log_output: StringIO) -> None:
    result = Fail("user.not-found")
    assert log_result(result, get_logger("users"), event="lookup") is result
    assert '[warning] lookup error="user.not-found" logger="users" ok=false' in log_output.getvalue()
