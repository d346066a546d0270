"""Sources of the current time."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone


class TimeSource(ABC):
    """Provides the current time; abstracted so that time can be controlled in tests."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current point in time as an aware datetime."""


class WallClock(TimeSource):
    """The system clock."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)