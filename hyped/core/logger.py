"""Plain-text logging of timestamped messages to the standard streams."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from enum import IntEnum

from hyped.core.clock import TimeSource


class LogLevel(IntEnum):
    """Severity of a message; a logger prints messages at or above its own level."""

    NONE = 0
    DEBUG = 1
    INFO = 2
    FATAL = 3


class BaseLogger(ABC):
    """Anything that accepts printf-style log messages."""

    @abstractmethod
    def log(self, level: LogLevel, message: str, *args: object) -> None:
        """Log ``message % args`` at ``level``."""


class Logger(BaseLogger):
    """Writes DEBUG and INFO messages to stdout and FATAL messages to stderr."""

    def __init__(self, label: str, level: LogLevel, time_source: TimeSource) -> None:
        self.label = label
        self.level = level
        self.time_source = time_source

    def log(self, level: LogLevel, message: str, *args: object) -> None:
        if self.level == LogLevel.NONE or level < self.level or level == LogLevel.NONE:
            return
        stream = sys.stderr if level == LogLevel.FATAL else sys.stdout
        text = message % args if args else message
        stream.write(f"{self._head(level.name)}{text}\n")

    def _head(self, title: str) -> str:
        point = self.time_source.now()
        local = point.astimezone()
        milliseconds = point.microsecond // 1000
        return f"{local:%H:%M:%S}.{milliseconds:03d} {title}[{self.label}] "