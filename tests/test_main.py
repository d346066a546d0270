import io
import json

from hyped.debug.main import main


def write_disabled_config(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "debugger": {
                    "io": {
                        "adc": {"enabled": False},
                        "i2c": {"enabled": False},
                        "spi": {"enabled": False},
                    }
                }
            }
        )
    )
    return path


def test_main_without_arguments_prints_usage(capsys):
    assert main([]) == 1
    err = capsys.readouterr().err
    assert "FATAL[Debugger] Usage: " in err
    assert err.endswith(" [config_file]\n")


def test_main_with_missing_file(tmp_path, capsys):
    missing = tmp_path / "missing.json"
    assert main([str(missing)]) == 1
    err = capsys.readouterr().err
    assert f"Failed to create debugger from file {missing}" in err


def test_main_with_invalid_json(tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_text("[")
    assert main([str(path)]) == 1
    assert "Error parsing JSON" in capsys.readouterr().err


def test_main_runs_console_until_quit(tmp_path, capsys, monkeypatch):
    path = write_disabled_config(tmp_path)
    stdin = io.StringIO("help\nquit\nhelp\n")
    monkeypatch.setattr("sys.stdin", stdin)
    assert main([str(path)]) == 0
    out = capsys.readouterr().out
    assert out.count("Available commands:") == 1
    assert "INFO[Debugger]   help: Print this help message\n" in out
    assert stdin.read() == "help\n"


def test_main_stops_at_end_of_input(tmp_path, capsys, monkeypatch):
    path = write_disabled_config(tmp_path)
    monkeypatch.setattr("sys.stdin", io.StringIO("unknown\n"))
    assert main([str(path)]) == 0
    captured = capsys.readouterr()
    assert "Unknown command: unknown" in captured.err
    assert captured.out.count("> ") == 2