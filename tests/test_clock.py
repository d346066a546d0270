from datetime import datetime, timezone

import pytest

from hyped.core.clock import TimeSource, WallClock


def test_wall_clock_is_between_surrounding_readings():
    before = datetime.now(timezone.utc)
    reading = WallClock().now()
    after = datetime.now(timezone.utc)
    assert before <= reading <= after


def test_wall_clock_is_timezone_aware():
    assert WallClock().now().utcoffset() is not None
    assert WallClock().now().utcoffset().total_seconds() == 0


def test_wall_clock_is_monotonic_enough():
    clock = WallClock()
    first = clock.now()
    second = clock.now()
    assert second >= first


def test_time_source_is_abstract():
    with pytest.raises(TypeError):
        TimeSource()