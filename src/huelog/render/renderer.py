"""Record renderer: turns one Record into colored lines and writes them once.

Output layout for a record with attributes:

    INFO  2024-01-03 10:30:45 main.py:42 request done
    status=200 path=/users
    db:
      rows=3 query="SELECT 1"
    user=42

The first line carries level, time, source and message. Attribute lines
follow with one indent unit per enclosing group. Scalars at the same depth
share a line until a group interrupts them.
"""

from __future__ import annotations

import io
import sys
import threading
from typing import IO, TYPE_CHECKING

from ..core import Attr, Group, Record, to_attrs
from ..foundation.errors import Err, ErrorCode, Ok, RenderError, Result
from .options import RenderOptions, SharedOptions
from .segments import format_source, format_time, format_value, level_color, level_tag

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


class Renderer:
    """Formats records per a shared options table and writes them to a sink.

    Args:
        output: Text or binary stream (default: stderr)
        options: Shared handle, or a plain table to wrap in one (default: defaults)
        colors: Force styles on/off (None = on only if the sink is a TTY)

    Renderers derived through `with_attrs`/`with_group` share the sink, the
    options handle and the output lock of their parent.
    """

    __slots__ = ("output", "options", "colors", "_lock", "_groups", "_bound")

    def __init__(
        self,
        output: IO[str] | IO[bytes] | None = None,
        options: SharedOptions | RenderOptions | None = None,
        *,
        colors: bool | None = None,
    ) -> None:
        self.output = output if output is not None else sys.stderr
        self.options = options if isinstance(options, SharedOptions) else SharedOptions(options)
        if colors is None:
            colors = hasattr(self.output, "isatty") and self.output.isatty()
        self.colors: bool = colors
        self._lock = threading.Lock()
        self._groups: tuple[str, ...] = ()
        # (number of groups open when bound, attr)
        self._bound: tuple[tuple[int, Attr], ...] = ()

    # ─── Derivation ──────────────────────────────────────────────────────

    def with_attrs(self, *attrs: Attr, **kw: object) -> Renderer:
        """Renderer that prepends these attrs, nested under the groups open now."""
        new = to_attrs(attrs) + to_attrs(kw)
        if not new:
            return self
        depth = len(self._groups)
        return self._derive(self._groups, (*self._bound, *((depth, a) for a in new)))

    def with_group(self, name: str) -> Renderer:
        """Renderer whose later attrs (bound or per-record) nest under `name`."""
        if not name:
            return self
        return self._derive((*self._groups, name), self._bound)

    def _derive(self, groups: tuple[str, ...], bound: tuple[tuple[int, Attr], ...]) -> Renderer:
        child = object.__new__(Renderer)
        child.output = self.output
        child.options = self.options
        child.colors = self.colors
        child._lock = self._lock
        child._groups = groups
        child._bound = bound
        return child

    # ─── Rendering ───────────────────────────────────────────────────────

    def enabled(self, level: int) -> bool:
        return level >= self.options.get("level")  # type: ignore[operator]

    def format(self, record: Record) -> str:
        """Full text for one record, newline-terminated. Pure."""
        return self._compose(record, self._snapshot())

    def handle(self, record: Record) -> Result[int, RenderError]:
        """Render and write one record with a single write call.

        Returns Ok(count written), Ok(0) for records below the level
        threshold, or Err on a sink failure. A sink that rejects the first
        form (str vs bytes) gets one retry in the other; nothing else is retried.
        """
        opts = self._snapshot()
        if record.level < opts.level:
            return Ok(0)
        return self._write(self._compose(record, opts))

    def _snapshot(self) -> RenderOptions:
        opts = self.options.snapshot()
        return opts.healed() if self.colors else opts.without_colors()

    def _compose(self, record: Record, opts: RenderOptions) -> str:
        lines = [head_line(record, opts)]
        lines.extend(attr_lines(self._nest(record.attrs), opts))
        return "".join(f"{line}\n" for line in lines)

    def _nest(self, attrs: tuple[Attr, ...]) -> tuple[Attr, ...]:
        """Bound attrs at their depth, record attrs under every open group."""
        if not self._bound and not self._groups:
            return attrs
        content = (*self._bound_at(len(self._groups)), *attrs)
        for depth in reversed(range(len(self._groups))):
            content = (*self._bound_at(depth), Attr(self._groups[depth], Group(content)))
        return content

    def _bound_at(self, depth: int) -> Iterator[Attr]:
        return (a for d, a in self._bound if d == depth)

    def _write(self, text: str) -> Result[int, RenderError]:
        binary = isinstance(self.output, (io.RawIOBase, io.BufferedIOBase))
        data: str | bytes = text.encode("utf-8") if binary else text
        with self._lock:
            try:
                try:
                    written = self.output.write(data)  # type: ignore[arg-type]
                except TypeError:
                    # Sink wants the other form (str vs bytes); one retry.
                    data = text if isinstance(data, bytes) else text.encode("utf-8")
                    written = self.output.write(data)  # type: ignore[arg-type]
                if hasattr(self.output, "flush"):
                    self.output.flush()
            except (OSError, ValueError, TypeError) as e:
                return Err(RenderError.from_exception(e, ErrorCode.WRITE_FAILED, context="write failed"))
        return Ok(written if isinstance(written, int) else len(data))

    def __repr__(self) -> str:
        return f"Renderer(output={self.output!r}, colors={self.colors}, groups={list(self._groups)})"


def head_line(record: Record, opts: RenderOptions) -> str:
    """Level, time, source and message joined by single spaces."""
    level = level_color(record.level, opts.level_colors).wrap(
        level_tag(record.level, opts.level_tags, opts.level_width),
    )
    when = format_time(record.time, opts.time_format)
    src = format_source(record.source, opts.source_file_mode, opts.source_file_length)
    parts = [
        level,
        opts.time_color.wrap(when) if when else "",  # type: ignore[union-attr]
        opts.source_file_color.wrap(src) if src else "",  # type: ignore[union-attr]
        opts.msg_color.wrap(record.message),  # type: ignore[union-attr]
    ]
    return " ".join(p for p in parts if p)


def attr_lines(attrs: Iterable[Attr], opts: RenderOptions) -> list[str]:
    """Flatten an attribute tree into indented lines, preserving order.

    Walks with an explicit stack so nesting depth is bounded only by memory.
    """
    key_color, val_color = opts.attr_key_color, opts.attr_val_color
    lines: list[str] = []
    pending: list[str] = []
    stack: list[tuple[Iterator[Attr], int]] = [(iter(attrs), 0)]

    def flush(depth: int) -> None:
        if pending:
            lines.append(opts.indent * depth + " ".join(pending))
            pending.clear()

    while stack:
        it, depth = stack[-1]
        item = next(it, None)
        if item is None:
            flush(depth)
            stack.pop()
        elif isinstance(item.value, Group):
            flush(depth)
            lines.append(f"{opts.indent * depth}{key_color.wrap(item.key)}:")  # type: ignore[union-attr]
            stack.append((iter(item.value.attrs), depth + 1))
        else:
            value = format_value(item.value.value, opts.quote_values)
            pending.append(f"{key_color.wrap(item.key)}={val_color.wrap(value)}")  # type: ignore[union-attr]
    return lines
