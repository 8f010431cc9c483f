"""Standard-library logging integration.

`ColorHandler` is a drop-in `logging.Handler`: every `extra` key becomes an
attribute (dicts become groups) and caller location comes from the record.

Quick Start:
    >>> import logging
    >>> from huelog import install
    >>> install(level=logging.DEBUG)
    >>> logging.getLogger("api").info("request done", extra={"status": 200, "db": {"rows": 3}})
"""

from __future__ import annotations

import logging
import traceback
from datetime import datetime
from typing import IO

from ...core import Record, Source, attr
from ...foundation.config import get_settings
from ...foundation.errors import RenderException
from ...render import Renderer, RenderOptions, SharedOptions

log = logging.getLogger("huelog.handler")

# Attributes every LogRecord carries; anything else arrived through `extra`
_RESERVED: frozenset[str] = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


def record_from_logging(record: logging.LogRecord) -> Record:
    """Convert a stdlib LogRecord, keeping `extra` keys in insertion order."""
    attrs = [attr(k, v) for k, v in vars(record).items() if k not in _RESERVED]
    if record.exc_info and record.exc_info[0] is not None:
        attrs.append(attr("exc_info", "".join(traceback.format_exception(*record.exc_info)).rstrip()))
    elif record.exc_text:
        attrs.append(attr("exc_info", record.exc_text))
    if record.stack_info:
        attrs.append(attr("stack_info", record.stack_info))
    source = Source(record.pathname, record.lineno, record.funcName or "") if record.pathname else None
    return Record(
        level=record.levelno,
        message=record.getMessage(),
        time=datetime.fromtimestamp(record.created).astimezone(),
        source=source,
        attrs=tuple(attrs),
    )


class ColorHandler(logging.Handler):
    """Logging handler that renders records through a Renderer.

    Records are gated twice: by the stdlib (logger and handler level) and
    by the render threshold in `options.level`. Without explicit options the
    render threshold follows the handler level, including later
    `setLevel()` calls, so the stdlib gate alone decides.

    Args:
        stream: Output stream (default: stderr)
        options: Render options or a shared handle (default: from environment settings,
            with the threshold taken from `level`)
        renderer: Use this renderer instead of building one
        colors: Force colors on/off (None = auto-detect TTY)
        level: Handler level
    """

    def __init__(
        self,
        stream: IO[str] | IO[bytes] | None = None,
        options: SharedOptions | RenderOptions | None = None,
        *,
        renderer: Renderer | None = None,
        colors: bool | None = None,
        level: int = logging.NOTSET,
    ) -> None:
        super().__init__(level)
        self._follow_level = renderer is None and options is None
        if renderer is None:
            if options is None:
                options = get_settings().to_options()
                options.level = self.level
            renderer = Renderer(stream, options, colors=colors)
        self.renderer = renderer

    def setLevel(self, level: int | str) -> None:  # noqa: N802
        super().setLevel(level)
        if getattr(self, "_follow_level", False):
            self.renderer.options.set(level=self.level)

    @property
    def options(self) -> SharedOptions:
        return self.renderer.options

    @property
    def stream(self) -> IO[str] | IO[bytes]:
        return self.renderer.output

    def emit(self, record: logging.LogRecord) -> None:
        try:
            result = self.renderer.handle(record_from_logging(record))
            if result.is_err():
                raise RenderException(result.unwrap_err())
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)

    def flush(self) -> None:
        self.acquire()
        try:
            if hasattr(self.stream, "flush"):
                self.stream.flush()
        finally:
            self.release()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {getattr(self.stream, 'name', self.stream)!r} ({logging.getLevelName(self.level)})>"


def install(
    logger: logging.Logger | str | None = None,
    *,
    options: SharedOptions | RenderOptions | None = None,
    stream: IO[str] | IO[bytes] | None = None,
    level: int | str | None = None,
    colors: bool | None = None,
) -> ColorHandler:
    """Attach a ColorHandler to a logger (root by default).

    Replaces a ColorHandler previously installed on the same logger. When
    `level` is given it becomes both the logger level and the render
    threshold.

    Example:
        >>> handler = install("myapp", level="DEBUG", colors=True)
        >>> handler.options.set(time_format="%H:%M:%S")
    """
    target = logger if isinstance(logger, logging.Logger) else logging.getLogger(logger)
    for existing in [h for h in target.handlers if isinstance(h, ColorHandler)]:
        target.removeHandler(existing)
    handler = ColorHandler(stream, options, colors=colors)
    if level is not None:
        levelno = _levelno(level)
        target.setLevel(levelno)
        handler.options.set(level=levelno)
    log.debug("installing ColorHandler on %r", target.name)
    target.addHandler(handler)
    return handler


def _levelno(level: int | str) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown level: {level}")
    return value
