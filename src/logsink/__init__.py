"""logsink: rotating-file and console destinations for formatted log records.

Public API:
    new_log_output(descriptor)  Build a sink: "STDOUT", "STDERR" or a file path
    SinkRegistry                One sink per destination, explicitly owned
    Level, level_name, level_color, with_color_level_prefix

Logging (swappable formatter, sink-backed destination):
    setup_logging(config, registry)  Route the root logger into a sink
    get_logger(name)                 Get a structured logger

Every sink takes output_log(level, timestamp_ns, formatted_bytes) and
close(). Sinks never raise on filesystem trouble: they report it on
stderr and keep going.
"""

from logsink.config import SinkConfig
from logsink.destination import new_log_output
from logsink.levels import (
    Level,
    from_stdlib_level,
    level_color,
    level_name,
    with_color_level_prefix,
)
from logsink.logging import (
    LogFormatter,
    SinkHandler,
    get_logger,
    register_formatter,
    setup_logging,
    shutdown_logging,
)
from logsink.registry import SinkRegistry
from logsink.sinks import (
    HOUR,
    STDERR,
    STDOUT,
    ConsoleSink,
    LogOutput,
    RotatingFileSink,
    SinkState,
)

__all__ = [
    # Sinks
    "LogOutput",
    "ConsoleSink",
    "RotatingFileSink",
    "SinkState",
    "HOUR",
    "STDOUT",
    "STDERR",
    "new_log_output",
    "SinkRegistry",
    # Levels
    "Level",
    "level_name",
    "level_color",
    "with_color_level_prefix",
    "from_stdlib_level",
    # Config
    "SinkConfig",
    # Logging
    "LogFormatter",
    "SinkHandler",
    "get_logger",
    "register_formatter",
    "setup_logging",
    "shutdown_logging",
]
