import pytest

from hyped.core.logger import LogLevel
from hyped.utils.dummy_logger import DummyLogger


@pytest.mark.parametrize("level", list(LogLevel))
def test_logs_nothing(capsys, level):
    DummyLogger().log(level, "message %d", 1)
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""


def test_ignores_malformed_format(capsys):
    DummyLogger().log(LogLevel.FATAL, "%d %d")
    captured = capsys.readouterr()
    assert (captured.out, captured.err) == ("", "")