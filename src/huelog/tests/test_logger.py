"""Tests for the bound structured logger."""

from __future__ import annotations

import io
import sys
from collections.abc import Iterator
from datetime import datetime, timezone

import pytest

from huelog import (
    Level,
    Logger,
    Renderer,
    RenderOptions,
    SourceFileMode,
    attr,
    configure,
    get_logger,
    group,
    reset,
)

FIXED = datetime(2024, 1, 3, 10, 30, 45, tzinfo=timezone.utc)


def make_logger(sink: io.StringIO, **opts: object) -> Logger:
    options = RenderOptions(**{"time_format": "", "source_file_mode": SourceFileMode.NOP, **opts})  # type: ignore[arg-type]
    return Logger(Renderer(sink, options, colors=False), clock=lambda: FIXED)


@pytest.fixture(autouse=True)
def clean_renderer() -> Iterator[None]:
    """Reset the global renderer before and after each test."""
    reset()
    yield
    reset()


def test_bound_attrs_precede_call_attrs() -> None:
    sink = io.StringIO()
    make_logger(sink).bind(service="api").info("request", path="/users")
    assert sink.getvalue() == "INFO  request\nservice=api path=/users\n"


def test_positional_attrs_then_keywords() -> None:
    sink = io.StringIO()
    make_logger(sink).info("request", group("req", method="GET"), attr("id", 7), status=200)
    assert sink.getvalue() == "INFO  request\nreq:\n  method=GET\nid=7 status=200\n"


def test_with_group_nests_later_attrs() -> None:
    sink = io.StringIO()
    make_logger(sink).bind(a=1).with_group("req").bind(b=2).info("x", c=3)
    assert sink.getvalue() == "INFO  x\na=1\nreq:\n  b=2 c=3\n"


def test_with_group_without_attrs_keeps_group_line() -> None:
    sink = io.StringIO()
    make_logger(sink).with_group("req").info("x")
    assert sink.getvalue() == "INFO  x\nreq:\n"


def test_bind_is_immutable() -> None:
    sink = io.StringIO()
    base = make_logger(sink)
    base.bind(extra=1)
    base.info("plain")
    assert sink.getvalue() == "INFO  plain\n"


def test_levels() -> None:
    sink = io.StringIO()
    log = make_logger(sink, level=Level.DEBUG)
    log.debug("d")
    log.info("i")
    log.warning("w")
    log.error("e")
    log.log(25, "custom")
    assert sink.getvalue() == "DEBUG d\nINFO  i\nWARN  w\nERROR e\n25    custom\n"


def test_below_threshold_returns_zero() -> None:
    sink = io.StringIO()
    result = make_logger(sink).debug("hidden")
    assert result.unwrap() == 0
    assert sink.getvalue() == ""


def test_returns_write_result() -> None:
    sink = io.StringIO()
    result = make_logger(sink).info("x")
    assert result.is_ok()
    assert result.unwrap() == len("INFO  x\n")


def test_clock_is_the_only_time_source() -> None:
    sink = io.StringIO()
    make_logger(sink, time_format="%H:%M").info("x")
    assert sink.getvalue() == "INFO  10:30 x\n"


def test_source_capture_points_at_caller() -> None:
    sink = io.StringIO()
    log = Logger(
        Renderer(sink, RenderOptions(time_format=""), colors=False),
        add_source=True,
    )
    line = sys._getframe().f_lineno + 1
    log.info("here")
    assert sink.getvalue() == f"INFO  test_logger.py:{line} here\n"


def test_source_capture_through_log() -> None:
    sink = io.StringIO()
    log = Logger(Renderer(sink, RenderOptions(time_format=""), colors=False), add_source=True)
    line = sys._getframe().f_lineno + 1
    log.log(Level.WARN, "here")
    assert sink.getvalue() == f"WARN  test_logger.py:{line} here\n"


def test_exception_attaches_traceback() -> None:
    sink = io.StringIO()
    log = make_logger(sink)
    try:
        {}["missing"]
    except KeyError:
        log.exception("lookup failed", key="missing")
    out = sink.getvalue()
    assert out.startswith('ERROR lookup failed\nkey=missing exc_info="Traceback')
    assert "KeyError" in out


def test_get_logger_uses_configured_renderer() -> None:
    sink = io.StringIO()
    configure(sink, RenderOptions(time_format="", source_file_mode=SourceFileMode.NOP), colors=False)
    get_logger("api", env="prod").info("up")
    assert sink.getvalue() == "INFO  up\nlogger=api env=prod\n"


def test_get_logger_without_name() -> None:
    sink = io.StringIO()
    configure(sink, RenderOptions(time_format="", source_file_mode=SourceFileMode.NOP), colors=False)
    get_logger().info("up")
    assert sink.getvalue() == "INFO  up\n"
