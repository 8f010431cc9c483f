"""Rendering policy table and its thread-safe shared handle.

`RenderOptions` is plain data with deterministic defaults. `SharedOptions`
is the handle a caller and its renderers hold jointly; every render takes a
snapshot under a shared lock, every change happens under an exclusive one,
so no render ever sees a half-applied update.

Example:
    >>> opts = SharedOptions()
    >>> opts.set(time_format="", source_file_mode=SourceFileMode.LONG_FILE)
    >>> opts.get("time_format")
    ''
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field, fields, replace
from enum import IntEnum
from typing import Callable

from ..core import Level
from .color import NO_COLOR, AnsiColor, Color, Style, resolve

DEFAULT_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LEVEL_WIDTH = 5
DEFAULT_INDENT = "  "


class SourceFileMode(IntEnum):
    """How much of the caller's file path to show."""
    NOP = 0          # omit the source segment
    SHORT_FILE = 1   # main.py:69
    MEDIUM_FILE = 2  # pkg/server/main.py:69, relative to the working directory
    LONG_FILE = 3    # /home/user/src/app/pkg/server/main.py:69


def default_level_colors() -> dict[int, Color | None]:
    return {
        Level.DEBUG: AnsiColor.of(Style.FAINT),
        Level.INFO: AnsiColor.of(Style.FG_CYAN),
        Level.WARN: AnsiColor.of(Style.FG_YELLOW),
        Level.ERROR: AnsiColor.of(Style.FG_RED),
    }


def default_level_tags() -> dict[int, str]:
    return {Level.DEBUG: "DEBUG", Level.INFO: "INFO", Level.WARN: "WARN", Level.ERROR: "ERROR"}


@dataclass(slots=True)
class RenderOptions:
    """Every knob the renderer reads. Any combination of values is valid."""

    level: int = Level.INFO
    level_colors: dict[int, Color | None] = field(default_factory=default_level_colors)
    level_tags: dict[int, str] = field(default_factory=default_level_tags)
    level_width: int = DEFAULT_LEVEL_WIDTH
    time_format: str = DEFAULT_TIME_FORMAT
    time_color: Color | None = field(default_factory=lambda: AnsiColor.of(Style.FAINT))
    msg_color: Color | None = NO_COLOR
    attr_key_color: Color | None = NO_COLOR
    attr_val_color: Color | None = NO_COLOR
    source_file_color: Color | None = NO_COLOR
    source_file_mode: SourceFileMode = SourceFileMode.SHORT_FILE
    source_file_length: int | None = None
    quote_values: bool = True
    indent: str = DEFAULT_INDENT

    def copy(self) -> RenderOptions:
        """Copy with independent level tables."""
        return replace(self, level_colors=dict(self.level_colors), level_tags=dict(self.level_tags))

    def healed(self) -> RenderOptions:
        """Copy with every unset color replaced by the passthrough."""
        return replace(
            self,
            level_colors={lvl: resolve(c) for lvl, c in self.level_colors.items()},
            level_tags=dict(self.level_tags),
            time_color=resolve(self.time_color),
            msg_color=resolve(self.msg_color),
            attr_key_color=resolve(self.attr_key_color),
            attr_val_color=resolve(self.attr_val_color),
            source_file_color=resolve(self.source_file_color),
        )

    def without_colors(self) -> RenderOptions:
        """Copy with every color set to the passthrough."""
        return replace(
            self,
            level_colors={lvl: NO_COLOR for lvl in self.level_colors},
            level_tags=dict(self.level_tags),
            time_color=NO_COLOR,
            msg_color=NO_COLOR,
            attr_key_color=NO_COLOR,
            attr_val_color=NO_COLOR,
            source_file_color=NO_COLOR,
        )


def default_options() -> RenderOptions:
    """Fresh options table with the documented defaults."""
    return RenderOptions()


OPTION_NAMES: frozenset[str] = frozenset(f.name for f in fields(RenderOptions))


class ReadWriteLock:
    """Many concurrent readers or one writer. Waiting writers block new readers."""

    __slots__ = ("_cond", "_readers", "_writer", "_writers_waiting")

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class SharedOptions:
    """Lock-guarded handle on one RenderOptions, shared by caller and renderers.

    The wrapped instance is held by reference. Mutate it through `set()` or
    `update()`; direct attribute writes on the wrapped object bypass the lock.
    """

    __slots__ = ("_options", "_lock")

    def __init__(self, options: RenderOptions | None = None) -> None:
        self._options = options if options is not None else default_options()
        self._lock = ReadWriteLock()

    def get(self, name: str) -> object:
        _check_names((name,))
        with self._lock.read():
            value = getattr(self._options, name)
            return dict(value) if isinstance(value, dict) else value

    def set(self, **changes: object) -> None:
        """Apply all changes atomically."""
        _check_names(changes)
        with self._lock.write():
            for name, value in changes.items():
                setattr(self._options, name, dict(value) if isinstance(value, dict) else value)

    def update(self, fn: Callable[[RenderOptions], None]) -> None:
        """Run fn against the live options under the exclusive lock."""
        with self._lock.write():
            fn(self._options)

    def snapshot(self) -> RenderOptions:
        """Consistent copy of the current options."""
        with self._lock.read():
            return self._options.copy()

    def __repr__(self) -> str:
        return f"SharedOptions({self.snapshot()!r})"


def _check_names(names: object) -> None:
    unknown = sorted(set(names) - OPTION_NAMES)  # type: ignore[call-overload]
    if unknown:
        raise ValueError(f"Unknown render option(s): {', '.join(unknown)}. Valid: {', '.join(sorted(OPTION_NAMES))}")
