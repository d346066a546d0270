import time
from datetime import datetime, timedelta, timezone

import pytest

from hyped.core.logger import BaseLogger, LogLevel, Logger
from hyped.utils.manual_time import ManualTime


@pytest.fixture
def london(monkeypatch):
    monkeypatch.setenv("TZ", "Europe/London")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


def _log_once(level, manual_time, message="test", *args):
    Logger("test", level, manual_time).log(level, message, *args)


@pytest.mark.parametrize(
    ("level", "expected"),
    [
        (LogLevel.DEBUG, "01:00:00.000 DEBUG[test] test\n"),
        (LogLevel.INFO, "01:00:00.000 INFO[test] test\n"),
        (LogLevel.FATAL, ""),
    ],
)
def test_stdout(london, capsys, level, expected):
    _log_once(level, ManualTime())
    assert capsys.readouterr().out == expected


@pytest.mark.parametrize(
    ("level", "expected"),
    [
        (LogLevel.DEBUG, ""),
        (LogLevel.INFO, ""),
        (LogLevel.FATAL, "01:00:00.000 FATAL[test] test\n"),
    ],
)
def test_stderr(london, capsys, level, expected):
    _log_once(level, ManualTime())
    assert capsys.readouterr().err == expected


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [
        (3600, "02:00:00.000 DEBUG[test] test\n"),
        (24 * 3600, "01:00:00.000 DEBUG[test] test\n"),
        (60, "01:01:00.000 DEBUG[test] test\n"),
        (1, "01:00:01.000 DEBUG[test] test\n"),
    ],
)
def test_varying_times(london, capsys, seconds, expected):
    manual_time = ManualTime()
    manual_time.set_time(datetime.fromtimestamp(seconds, timezone.utc))
    _log_once(LogLevel.DEBUG, manual_time)
    assert capsys.readouterr().out == expected


def test_milliseconds_are_printed(london, capsys):
    manual_time = ManualTime()
    manual_time.set_time(datetime.fromtimestamp(0, timezone.utc) + timedelta(milliseconds=250))
    _log_once(LogLevel.INFO, manual_time)
    assert capsys.readouterr().out == "01:00:00.250 INFO[test] test\n"


def test_format_arguments(london, capsys):
    _log_once(LogLevel.INFO, ManualTime(), "pin %d is %s", 7, "high")
    assert capsys.readouterr().out == "01:00:00.000 INFO[test] pin 7 is high\n"


def test_messages_below_level_are_dropped(london, capsys):
    logger = Logger("test", LogLevel.INFO, ManualTime())
    logger.log(LogLevel.DEBUG, "hidden")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""


def test_level_none_prints_nothing(london, capsys):
    logger = Logger("test", LogLevel.NONE, ManualTime())
    logger.log(LogLevel.FATAL, "hidden")
    logger.log(LogLevel.INFO, "hidden")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""


def test_base_logger_is_abstract():
    with pytest.raises(TypeError):
        BaseLogger()