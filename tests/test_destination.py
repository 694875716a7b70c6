"""Tests for new_log_output: sentinel routing and file-backed sinks."""

from __future__ import annotations

import sys

from logsink.destination import is_console, new_log_output
from logsink.levels import Level
from logsink.sinks.base import STDERR, STDOUT
from logsink.sinks.console import ConsoleSink
from logsink.sinks.rotating_file import RotatingFileSink, SinkState

MINUTE = 60 * 1_000_000_000


class TestSentinels:
    def test_sentinel_values(self):
        assert STDOUT == "STDOUT"
        assert STDERR == "STDERR"
        assert is_console(STDOUT)
        assert is_console(STDERR)
        assert not is_console("stdout")
        assert not is_console("/var/log/app.log")

    def test_stderr_sentinel(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        sink = new_log_output(STDERR)
        assert isinstance(sink, ConsoleSink)
        assert sink.stream is sys.stderr

        sink.output_log(Level.ERROR, 0, b"boom")
        sink.close()
        assert capsys.readouterr().err == "\x1b[31;1m[ERROR]\x1b[0mboom"
        assert list(tmp_path.iterdir()) == []

    def test_stdout_sentinel(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        sink = new_log_output(STDOUT)
        sink.output_log(Level.INFO, 0, b"ok\n")
        assert capsys.readouterr().out == "\x1b[32;1m[INFO]\x1b[0mok\n"
        assert list(tmp_path.iterdir()) == []


class TestFileDestination:
    def test_path_gives_rotating_sink(self, tmp_path):
        path = tmp_path / "logs" / "app.log"
        sink = new_log_output(str(path))
        assert isinstance(sink, RotatingFileSink)
        assert path.exists()
        sink.output_log(Level.INFO, 0, b"line\n")
        sink.close()
        assert path.read_bytes() == b"line\n"

    def test_default_window_is_one_hour(self, tmp_path):
        sink = new_log_output(str(tmp_path / "app.log"))
        assert sink.window_size == 3600 * 1_000_000_000
        sink.close()

    def test_window_and_clock_forwarded(self, tmp_path, clock):
        sink = new_log_output(
            str(tmp_path / "app.log"), window_size=MINUTE, clock=clock
        )
        assert sink.window_size == MINUTE
        assert sink.rotate_after == (clock.now // MINUTE + 1) * MINUTE
        sink.close()

    def test_lowercase_sentinel_is_a_path(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        sink = new_log_output("stdout")
        assert isinstance(sink, RotatingFileSink)
        assert (tmp_path / "stdout").exists()
        sink.close()

    def test_bare_filename_in_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        sink = new_log_output("app.log")
        sink.output_log(Level.INFO, 0, b"x")
        sink.close()
        assert (tmp_path / "app.log").read_bytes() == b"x"

    def test_setup_failure_still_returns_sink(self, tmp_path, capsys):
        blocker = tmp_path / "blocker"
        blocker.write_text("file")
        sink = new_log_output(str(blocker / "sub" / "app.log"))
        assert isinstance(sink, RotatingFileSink)
        assert sink.state is SinkState.UNAVAILABLE
        sink.output_log(Level.INFO, 0, b"dropped")
        sink.close()
        assert "failed to open log file" in capsys.readouterr().err
