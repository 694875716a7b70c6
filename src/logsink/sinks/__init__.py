"""Log sinks: strategy pattern for record destinations."""

from logsink.sinks.base import STDERR, STDOUT, LogOutput
from logsink.sinks.console import ConsoleSink
from logsink.sinks.rotating_file import HOUR, RotatingFileSink, SinkState

__all__ = [
    "LogOutput",
    "ConsoleSink",
    "RotatingFileSink",
    "SinkState",
    "HOUR",
    "STDOUT",
    "STDERR",
]
