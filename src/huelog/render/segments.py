"""Per-segment formatting: level tag, timestamp, source location, values.

Every function here is pure and total: configuration gaps fall back to a
fixed rendering and never raise.
"""

from __future__ import annotations

import json
import os
import re
from datetime import date, datetime
from typing import TYPE_CHECKING

from ..core import Level
from .color import NO_COLOR, Color
from .options import SourceFileMode

if TYPE_CHECKING:
    from ..core import ScalarValue, Source

# Standard levels, highest first, for picking a color for custom levels
_STANDARD_LEVELS = sorted(Level, reverse=True)

# Values needing quotes to stay one greppable key=value token
_NEEDS_QUOTES = re.compile(r'[\s="\x00-\x1f\x7f]')


def level_color(level: int, colors: dict[int, Color | None]) -> Color:
    """Exact entry, else the nearest standard level at or below `level`."""
    if level in colors:
        return colors[level] or NO_COLOR
    for std in _STANDARD_LEVELS:
        if level >= std:
            return colors.get(std) or NO_COLOR
    return NO_COLOR


def level_tag(level: int, tags: dict[int, str], width: int) -> str:
    tag = tags.get(level)
    if tag is None:
        tag = str(level)
    return tag.ljust(width)


def format_time(when: datetime, fmt: str) -> str:
    """strftime, or "" when the format is empty or unusable."""
    if not fmt:
        return ""
    try:
        return when.strftime(fmt)
    except (ValueError, TypeError, OverflowError):
        return ""


def source_path(file: str, mode: SourceFileMode) -> str:
    if mode == SourceFileMode.SHORT_FILE:
        return os.path.basename(file)
    if mode == SourceFileMode.MEDIUM_FILE:
        return relative_to_cwd(file)
    return file


def relative_to_cwd(file: str) -> str:
    """Path relative to the working directory, or `file` unchanged on failure."""
    try:
        return os.path.relpath(file, os.getcwd())
    except (OSError, ValueError):
        return file


def truncate_left(text: str, length: int | None) -> str:
    """Keep the rightmost `length` characters when `text` is longer."""
    if length is None or len(text) <= length:
        return text
    return text[len(text) - max(length, 0):]


def format_source(source: Source | None, mode: SourceFileMode, length: int | None) -> str:
    """`path:line` per mode, or "" when disabled or unknown."""
    if source is None or mode == SourceFileMode.NOP:
        return ""
    return truncate_left(f"{source_path(source.file, mode)}:{source.line}", length)


def format_value(value: ScalarValue, quote: bool) -> str:
    """Stringify a scalar; optionally quote it so the token stays greppable."""
    if isinstance(value, bool):
        text = "true" if value else "false"
    elif value is None:
        text = "null"
    elif isinstance(value, (datetime, date)):
        text = value.isoformat()
    else:
        text = str(value)
    if quote and (not text or _NEEDS_QUOTES.search(text)):
        return json.dumps(text, ensure_ascii=False)
    return text
