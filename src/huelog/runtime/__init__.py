"""Runtime integration with logging front-ends."""

from .logging import ColorHandler, Logger, configure, get_logger, install, record_from_logging, reset

__all__ = ["ColorHandler", "Logger", "configure", "get_logger", "install", "record_from_logging", "reset"]
