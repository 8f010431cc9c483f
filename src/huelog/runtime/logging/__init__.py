"""Logging front-ends: stdlib handler and bound structured logger."""

from .handler import ColorHandler, install, record_from_logging
from .logger import Logger, configure, get_logger, reset

__all__ = [
    "ColorHandler",
    "Logger",
    "configure",
    "get_logger",
    "install",
    "record_from_logging",
    "reset",
]
