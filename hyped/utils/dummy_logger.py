"""A logger that discards everything."""

from __future__ import annotations

from hyped.core.logger import BaseLogger, LogLevel


class DummyLogger(BaseLogger):
    """Accepts log messages and drops them."""

    def log(self, level: LogLevel, message: str, *args: object) -> None:
        return None