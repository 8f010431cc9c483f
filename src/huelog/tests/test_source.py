"""Tests for source-location formatting: modes, relative paths, truncation."""

from __future__ import annotations

import io
import os
from datetime import datetime, timezone

import pytest

from huelog import Level, Record, Renderer, RenderOptions, Source, SourceFileMode
from huelog.render.segments import format_source, relative_to_cwd, truncate_left

SRC = Source("/a/b/c/main.go", 42)


def head(source: Source | None, mode: SourceFileMode, length: int | None = None) -> str:
    opts = RenderOptions(time_format="", source_file_mode=mode, source_file_length=length)
    record = Record(Level.INFO, "msg", datetime(2024, 1, 1, tzinfo=timezone.utc), source)
    return Renderer(io.StringIO(), opts, colors=False).format(record)


# ═════════════════════════════════════════════════════════════════════════════
# Modes
# ═════════════════════════════════════════════════════════════════════════════


def test_nop_omits_source() -> None:
    """NOP drops the segment even when a location is present."""
    assert head(SRC, SourceFileMode.NOP) == "INFO  msg\n"
    assert head(SRC, SourceFileMode.NOP, length=5) == "INFO  msg\n"


@pytest.mark.parametrize("mode", list(SourceFileMode))
def test_missing_source_omits_segment(mode: SourceFileMode) -> None:
    assert head(None, mode) == "INFO  msg\n"


def test_short_file() -> None:
    assert format_source(SRC, SourceFileMode.SHORT_FILE, None) == "main.go:42"
    assert head(SRC, SourceFileMode.SHORT_FILE) == "INFO  main.go:42 msg\n"


def test_long_file() -> None:
    assert format_source(SRC, SourceFileMode.LONG_FILE, None) == "/a/b/c/main.go:42"


def test_medium_file_relative_to_cwd(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(os, "getcwd", lambda: "/a/b")
    src = Source("/a/b/c/main.go", 10)
    assert format_source(src, SourceFileMode.MEDIUM_FILE, None) == "c/main.go:10"


def test_medium_file_real_cwd(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    root = tmp_path.resolve()
    monkeypatch.chdir(root)
    file = root / "pkg" / "server.py"
    assert format_source(Source(str(file), 7), SourceFileMode.MEDIUM_FILE, None) == "pkg/server.py:7"


def test_medium_file_falls_back_when_cwd_unavailable(monkeypatch: pytest.MonkeyPatch) -> None:
    def gone() -> str:
        raise FileNotFoundError("cwd removed")

    monkeypatch.setattr(os, "getcwd", gone)
    assert relative_to_cwd("/a/b/c/main.go") == "/a/b/c/main.go"
    assert format_source(SRC, SourceFileMode.MEDIUM_FILE, None) == "/a/b/c/main.go:42"


def test_medium_file_falls_back_on_relpath_error(monkeypatch: pytest.MonkeyPatch) -> None:
    """Different drive roots make relpath raise ValueError."""

    def no_common_root(path: str, start: str) -> str:
        raise ValueError("path is on mount 'C:', start on mount 'D:'")

    monkeypatch.setattr(os.path, "relpath", no_common_root)
    assert relative_to_cwd("/a/b/c/main.go") == "/a/b/c/main.go"


# ═════════════════════════════════════════════════════════════════════════════
# Truncation
# ═════════════════════════════════════════════════════════════════════════════


def test_truncate_keeps_rightmost_characters(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(os, "getcwd", lambda: "/a/b")
    src = Source("/a/b/c/main.go", 10)
    assert format_source(src, SourceFileMode.MEDIUM_FILE, 8) == "in.go:10"


def test_truncate_boundary() -> None:
    """Equal length is untouched; one shorter drops exactly one character."""
    text = "c/main.go:10"
    assert truncate_left(text, len(text)) == text
    assert truncate_left(text, len(text) + 1) == text
    assert truncate_left(text, len(text) - 1) == "/main.go:10"


def test_truncate_shorter_than_line_suffix() -> None:
    assert truncate_left("main.go:12345", 3) == "345"
    assert truncate_left("main.go:42", 0) == ""
    assert truncate_left("main.go:42", None) == "main.go:42"


def test_truncated_source_in_head_line() -> None:
    assert head(SRC, SourceFileMode.LONG_FILE, length=10) == "INFO  main.go:42 msg\n"


def test_zero_length_drops_segment_cleanly() -> None:
    """A fully truncated source leaves no stray separator."""
    assert head(SRC, SourceFileMode.SHORT_FILE, length=0) == "INFO  msg\n"
