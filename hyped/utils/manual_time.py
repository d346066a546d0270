"""A time source whose time is set by hand."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from hyped.core.clock import TimeSource

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class ManualTime(TimeSource):
    """Reports whatever time it was last given; starts at the Unix epoch."""

    def __init__(self) -> None:
        self._current_time = EPOCH

    def now(self) -> datetime:
        return self._current_time

    def set_time(self, time_point: datetime) -> None:
        self._current_time = time_point

    def set_seconds_since_epoch(self, seconds_since_epoch: int) -> None:
        if seconds_since_epoch < 0:
            raise ValueError("seconds since epoch must not be negative")
        self._current_time = EPOCH + timedelta(seconds=seconds_since_epoch)