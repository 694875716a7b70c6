"""Tests for SinkRegistry: one sink per destination, explicit ownership."""

from __future__ import annotations

from logsink.levels import Level
from logsink.registry import SinkRegistry
from logsink.sinks.base import STDERR, STDOUT
from logsink.sinks.console import ConsoleSink
from logsink.sinks.rotating_file import RotatingFileSink, SinkState

MINUTE = 60 * 1_000_000_000


class TestOpen:
    def test_same_descriptor_same_sink(self, tmp_path):
        registry = SinkRegistry()
        path = str(tmp_path / "app.log")
        assert registry.open(path) is registry.open(path)
        assert len(registry) == 1
        registry.close_all()

    def test_equivalent_paths_share_sink(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        registry = SinkRegistry()
        a = registry.open("logs/app.log")
        b = registry.open("./logs/app.log")
        c = registry.open(str(tmp_path / "logs" / "app.log"))
        assert a is b is c
        registry.close_all()

    def test_distinct_destinations(self, tmp_path):
        registry = SinkRegistry()
        out = registry.open(STDOUT)
        err = registry.open(STDERR)
        f = registry.open(str(tmp_path / "app.log"))
        assert isinstance(out, ConsoleSink)
        assert isinstance(err, ConsoleSink)
        assert isinstance(f, RotatingFileSink)
        assert out is not err
        assert len(registry) == 3
        registry.close_all()

    def test_window_and_clock_applied(self, tmp_path, clock):
        registry = SinkRegistry(window_size=MINUTE, clock=clock)
        sink = registry.open(str(tmp_path / "app.log"))
        assert sink.window_size == MINUTE
        assert sink.rotate_after == (clock.now // MINUTE + 1) * MINUTE
        registry.close_all()

    def test_get_and_contains(self, tmp_path):
        registry = SinkRegistry()
        path = str(tmp_path / "app.log")
        assert registry.get(path) is None
        assert path not in registry
        sink = registry.open(path)
        assert registry.get(path) is sink
        assert path in registry
        assert 42 not in registry
        assert registry.descriptors() == [path]
        registry.close_all()


class TestClose:
    def test_close_one(self, tmp_path):
        registry = SinkRegistry()
        path = str(tmp_path / "app.log")
        sink = registry.open(path)
        registry.close(path)
        assert sink.state is SinkState.CLOSED
        assert path not in registry
        # Reopening builds a fresh sink
        assert registry.open(path) is not sink
        registry.close_all()

    def test_close_unknown_is_noop(self):
        SinkRegistry().close("/nowhere/app.log")

    def test_close_all(self, tmp_path):
        registry = SinkRegistry()
        a = registry.open(str(tmp_path / "a.log"))
        b = registry.open(str(tmp_path / "b.log"))
        registry.close_all()
        assert a.state is SinkState.CLOSED
        assert b.state is SinkState.CLOSED
        assert len(registry) == 0

    def test_context_manager_closes(self, tmp_path):
        path = tmp_path / "app.log"
        with SinkRegistry() as registry:
            sink = registry.open(str(path))
            sink.output_log(Level.INFO, 0, b"inside\n")
        assert sink.state is SinkState.CLOSED
        assert path.read_bytes() == b"inside\n"

    def test_console_close_keeps_stream(self, capsys):
        import sys

        with SinkRegistry() as registry:
            registry.open(STDOUT)
        assert not sys.stdout.closed


class TestWindowOverride:
    def test_open_with_window_override(self, tmp_path):
        with SinkRegistry() as registry:
            sink = registry.open(str(tmp_path / "app.log"), window_size=MINUTE)
            assert sink.window_size == MINUTE

    def test_override_ignored_for_open_sink(self, tmp_path):
        with SinkRegistry() as registry:
            path = str(tmp_path / "app.log")
            first = registry.open(path)
            again = registry.open(path, window_size=MINUTE)
            assert again is first
            assert again.window_size == 3600 * 1_000_000_000
