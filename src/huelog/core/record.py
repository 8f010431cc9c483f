"""Log record consumed by the renderer."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum

from .attrs import Attr


class Level(IntEnum):
    """Standard severities. Numbers match the stdlib logging module.

    Any other int is a valid custom level.
    """
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARN = logging.WARNING
    ERROR = logging.ERROR


@dataclass(frozen=True, slots=True)
class Source:
    """Caller location."""
    file: str
    line: int
    function: str = ""


@dataclass(frozen=True, slots=True)
class Record:
    """One structured log event."""

    level: int
    message: str
    time: datetime
    source: Source | None = None
    attrs: tuple[Attr, ...] = field(default_factory=tuple)
