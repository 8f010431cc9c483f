"""Bound structured logger writing straight to a Renderer.

Quick Start:
    >>> from huelog import configure, get_logger
    >>>
    >>> configure(colors=True)  # once at startup
    >>> log = get_logger("api", add_source=True)
    >>> log.info("request received", path="/users")
    >>>
    >>> # Bound context appears on every line
    >>> req_log = log.bind(request_id="abc123").with_group("db")
    >>> req_log.debug("query", rows=3)
"""

from __future__ import annotations

import logging
import sys
import threading
import traceback
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import IO, Callable

from ...core import Attr, Level, Record, Source, to_attrs
from ...foundation.config import get_settings
from ...foundation.errors import Ok, RenderError, Result
from ...render import Renderer, RenderOptions, SharedOptions

log = logging.getLogger("huelog.logger")


def _now() -> datetime:
    return datetime.now().astimezone()


@dataclass(frozen=True, slots=True)
class Logger:
    """Structured logger with bound context.

    Immutable: bind() and with_group() return new loggers sharing the same
    sink, options and output lock. Each call returns the write Result so a
    failing sink is visible to the caller.

    Example:
        >>> log = Logger(Renderer(colors=False)).bind(service="api")
        >>> log.info("request received", path="/users")
        # => INFO  2024-01-03 10:30:45 request received
        #    service=api path=/users
    """

    renderer: Renderer
    add_source: bool = False
    clock: Callable[[], datetime] = field(default=_now, repr=False)

    def bind(self, *attrs: Attr, **kw: object) -> Logger:
        """New logger with additional bound attributes."""
        return replace(self, renderer=self.renderer.with_attrs(*attrs, **kw))

    def with_group(self, name: str) -> Logger:
        """New logger whose later attributes nest under `name`."""
        return replace(self, renderer=self.renderer.with_group(name))

    def enabled(self, level: int) -> bool:
        return self.renderer.enabled(level)

    def _emit(self, level: int, event: str, attrs: tuple[Attr, ...], kw: dict[str, object], stacklevel: int) -> Result[int, RenderError]:
        if not self.renderer.enabled(level):
            return Ok(0)
        source = None
        if self.add_source:
            frame = sys._getframe(stacklevel + 1)
            source = Source(frame.f_code.co_filename, frame.f_lineno, frame.f_code.co_name)
        record = Record(level, event, self.clock(), source, to_attrs(attrs) + to_attrs(kw))
        return self.renderer.handle(record)

    def log(self, level: int, event: str, *attrs: Attr, **kw: object) -> Result[int, RenderError]:
        return self._emit(level, event, attrs, kw, 1)

    def debug(self, event: str, *attrs: Attr, **kw: object) -> Result[int, RenderError]:
        return self._emit(Level.DEBUG, event, attrs, kw, 1)

    def info(self, event: str, *attrs: Attr, **kw: object) -> Result[int, RenderError]:
        return self._emit(Level.INFO, event, attrs, kw, 1)

    def warning(self, event: str, *attrs: Attr, **kw: object) -> Result[int, RenderError]:
        return self._emit(Level.WARN, event, attrs, kw, 1)

    def error(self, event: str, *attrs: Attr, **kw: object) -> Result[int, RenderError]:
        return self._emit(Level.ERROR, event, attrs, kw, 1)

    def exception(self, event: str, *attrs: Attr, **kw: object) -> Result[int, RenderError]:
        """Log at ERROR with the active exception's traceback attached."""
        return self._emit(Level.ERROR, event, attrs, {**kw, "exc_info": traceback.format_exc().rstrip()}, 1)


# ─────────────────────────────────────────────────────────────────────────────
# Global Configuration
# ─────────────────────────────────────────────────────────────────────────────

_renderer: Renderer | None = None
_renderer_lock = threading.Lock()


def configure(
    output: IO[str] | IO[bytes] | None = None,
    options: SharedOptions | RenderOptions | None = None,
    *,
    colors: bool | None = None,
) -> Renderer:
    """Set the renderer used by get_logger().

    Args:
        output: Output stream (default: stderr)
        options: Render options (default: from environment settings)
        colors: Force colors on/off (None = auto-detect TTY)
    """
    global _renderer
    renderer = Renderer(output, options if options is not None else get_settings().to_options(), colors=colors)
    with _renderer_lock:
        _renderer = renderer
    log.debug("configured default renderer %r", renderer)
    return renderer


def reset() -> None:
    """Drop the configured renderer; the next get_logger() builds a fresh one."""
    global _renderer
    with _renderer_lock:
        _renderer = None


def _get_renderer() -> Renderer:
    global _renderer
    with _renderer_lock:
        if _renderer is None:
            _renderer = Renderer(None, get_settings().to_options())
        return _renderer


def get_logger(name: str | None = None, *, add_source: bool = False, **context: object) -> Logger:
    """Get a structured logger on the configured renderer.

    Args:
        name: Logger name (bound as the 'logger' attribute)
        add_source: Capture the caller's file and line
        **context: Initial bound attributes
    """
    ctx: dict[str, object] = {"logger": name} if name else {}
    ctx.update(context)
    return Logger(_get_renderer(), add_source=add_source).bind(**ctx)
