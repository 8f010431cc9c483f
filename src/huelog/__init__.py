"""huelog - colorized, human-readable rendering of structured log records.

Renders one record per write: a level/time/source/message line followed by
attribute lines, with nested groups indented one unit per level.

Quick Start (stdlib logging):
    >>> import logging
    >>> from huelog import install
    >>>
    >>> install(level="DEBUG")
    >>> logging.getLogger("api").info("request done", extra={"status": 200, "db": {"rows": 3}})
    # => INFO  2024-01-03 10:30:45 app.py:12 request done
    #    status=200
    #    db:
    #      rows=3

Structured Logger:
    >>> from huelog import configure, get_logger, group
    >>>
    >>> configure(colors=True)
    >>> log = get_logger("api", add_source=True)
    >>> log.info("request done", group("req", method="GET", path="/"), status=200)

Direct Rendering:
    >>> from huelog import Renderer, Record, SharedOptions, SourceFileMode
    >>>
    >>> options = SharedOptions()
    >>> options.set(source_file_mode=SourceFileMode.MEDIUM_FILE, source_file_length=24)
    >>> renderer = Renderer(sys.stdout, options)
    >>> renderer.handle(record)  # Ok(n) or Err(RenderError)
"""

from __future__ import annotations

__version__ = "0.1.0"

# Model
from .core import Attr, Group, Level, Record, Scalar, Source, attr, group, to_attrs

# Errors
from .foundation.errors import Err, ErrorCode, Ok, RenderError, RenderException, Result

# Config
from .foundation.config import HuelogSettings, clear_settings_cache, get_settings

# Rendering
from .render import (
    NO_COLOR,
    AnsiColor,
    Color,
    NoColor,
    RenderOptions,
    Renderer,
    SharedOptions,
    SourceFileMode,
    Style,
    default_options,
)

# Front-ends
from .runtime import ColorHandler, Logger, configure, get_logger, install, record_from_logging, reset

__all__ = [
    "__version__",
    # Model
    "Attr", "Group", "Level", "Record", "Scalar", "Source", "attr", "group", "to_attrs",
    # Errors
    "Err", "ErrorCode", "Ok", "RenderError", "RenderException", "Result",
    # Config
    "HuelogSettings", "clear_settings_cache", "get_settings",
    # Rendering
    "NO_COLOR", "AnsiColor", "Color", "NoColor", "RenderOptions", "Renderer",
    "SharedOptions", "SourceFileMode", "Style", "default_options",
    # Front-ends
    "ColorHandler", "Logger", "configure", "get_logger", "install", "record_from_logging", "reset",
]
