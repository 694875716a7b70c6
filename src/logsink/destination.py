"""Destination selector: turn a descriptor string into a ready sink."""

from __future__ import annotations

import sys
from typing import Callable

from logsink.sinks.base import STDERR, STDOUT, LogOutput
from logsink.sinks.console import ConsoleSink
from logsink.sinks.rotating_file import HOUR, RotatingFileSink


def is_console(descriptor: str) -> bool:
    return descriptor in (STDOUT, STDERR)


def new_log_output(
    descriptor: str,
    *,
    window_size: int = HOUR,
    clock: Callable[[], int] | None = None,
) -> LogOutput:
    """Build the sink for a destination descriptor.

    "STDOUT" and "STDERR" bind a ConsoleSink to that stream without any
    file I/O. Anything else is a file path for a RotatingFileSink; the
    sink is returned even if its directory or file could not be created.
    """
    if descriptor == STDOUT:
        return ConsoleSink(sys.stdout)
    if descriptor == STDERR:
        return ConsoleSink(sys.stderr)
    return RotatingFileSink(descriptor, window_size=window_size, clock=clock)
