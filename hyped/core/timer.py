"""Measuring how long a piece of work takes."""

from __future__ import annotations

from collections.abc import Callable
from datetime import timedelta

from hyped.core.clock import TimeSource


class Timer:
    """Times tasks against a time source."""

    def __init__(self, time_source: TimeSource) -> None:
        self.time_source = time_source

    def measure_execution_time(self, task: Callable[[], object]) -> timedelta:
        """Run ``task`` and return the time that passed while it ran."""
        before = self.time_source.now()
        task()
        after = self.time_source.now()
        return after - before