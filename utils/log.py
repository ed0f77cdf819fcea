"""Trace verbosity handling on top of the standard logging module."""

import logging
import sys
from enum import Enum
from typing import Optional, TextIO


# Top-level packages whose loggers follow the configured trace level
PROJECT_LOGGERS = ("scanner", "providers", "utils", "graph", "exporters", "cli")

LOG_FORMAT = "[%(levelname)s] %(message)s"


class TraceLevel(str, Enum):
    """Editor-style trace setting."""

    OFF = "off"
    MESSAGES = "messages"
    VERBOSE = "verbose"

    @property
    def logging_level(self) -> int:
        # Errors are reported even when tracing is off
        return {
            TraceLevel.OFF: logging.ERROR,
            TraceLevel.MESSAGES: logging.INFO,
            TraceLevel.VERBOSE: logging.DEBUG,
        }[self]


_handler: Optional[logging.Handler] = None


def configure_logging(level: TraceLevel = TraceLevel.OFF, stream: Optional[TextIO] = None) -> logging.Handler:
    """
    Route project log records to ``stream`` (stderr by default) at ``level``.

    Calling this again replaces the previously installed handler.
    """
    global _handler

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    for name in PROJECT_LOGGERS:
        package_logger = logging.getLogger(name)
        if _handler is not None:
            package_logger.removeHandler(_handler)
        package_logger.addHandler(handler)
        package_logger.setLevel(level.logging_level)
        package_logger.propagate = False

    _handler = handler
    return handler
