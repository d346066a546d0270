from datetime import datetime, timedelta, timezone

import pytest

from hyped.utils.manual_time import EPOCH, ManualTime


def test_starts_at_epoch():
    assert ManualTime().now() == datetime.fromtimestamp(0, timezone.utc)


def test_set_time():
    manual_time = ManualTime()
    for seconds in (0, 1000, 100, 2000):
        time_point = datetime.fromtimestamp(seconds, timezone.utc)
        manual_time.set_time(time_point)
        assert manual_time.now() == time_point


def test_set_seconds_since_epoch():
    manual_time = ManualTime()
    for seconds in (0, 1000, 100, 2000):
        manual_time.set_seconds_since_epoch(seconds)
        assert (manual_time.now() - EPOCH) // timedelta(seconds=1) == seconds


def test_negative_seconds_rejected():
    with pytest.raises(ValueError):
        ManualTime().set_seconds_since_epoch(-1)