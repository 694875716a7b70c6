"""Shared fixtures: a hand-driven wall clock for rotation tests."""

from __future__ import annotations

from datetime import datetime

import pytest

from logsink.sinks.rotating_file import HOUR

SECOND = 1_000_000_000
MINUTE = 60 * SECOND


class FakeClock:
    """Callable returning nanoseconds since the epoch; advance() moves it."""

    def __init__(self, now: int) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ns: int) -> None:
        self.now += ns


@pytest.fixture()
def clock() -> FakeClock:
    """Clock set ten minutes into an hour window."""
    start = int(datetime(2026, 3, 14, 10, 0).timestamp()) * SECOND
    start = (start // HOUR) * HOUR + 10 * MINUTE
    return FakeClock(start)
