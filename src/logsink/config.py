"""Sink configuration, env-var driven.

All settings have safe defaults: with nothing set, log records go to
stderr with colored level tags.

    LOGSINK_DESTINATION=STDERR (default) | STDOUT | <file path>
    LOGSINK_ROTATE_WINDOW=3600          rotation window in seconds
    LOGSINK_LOG_LEVEL=INFO
    LOGSINK_LOG_FORMATTER=structlog (default) | stdlib
    LOGSINK_LOG_FORMAT=console (default) | json
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field


def _int_env(var: str, default: int) -> int:
    """Parse an integer from an environment variable with a helpful error on bad input."""
    raw = os.environ.get(var)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as err:
        raise ValueError(f"{var}={raw!r} is not a valid integer") from err


@dataclass
class SinkConfig:
    """Sink configuration, env-var driven."""

    destination: str = field(
        default_factory=lambda: os.environ.get("LOGSINK_DESTINATION", "STDERR")
    )  # "STDOUT" | "STDERR" | file path

    rotate_window_seconds: int = field(
        default_factory=lambda: _int_env("LOGSINK_ROTATE_WINDOW", 3600)
    )

    log_level: str = field(
        default_factory=lambda: os.environ.get("LOGSINK_LOG_LEVEL", "INFO")
    )

    log_formatter: str = field(
        default_factory=lambda: os.environ.get("LOGSINK_LOG_FORMATTER", "structlog")
    )  # "structlog" | "stdlib"

    log_format: str = field(
        default_factory=lambda: os.environ.get("LOGSINK_LOG_FORMAT", "console")
    )  # "console" | "json"

    def __post_init__(self) -> None:
        if self.rotate_window_seconds <= 0:
            raise ValueError(
                f"rotate_window_seconds must be positive, got {self.rotate_window_seconds}"
            )

    @property
    def window_size_ns(self) -> int:
        return self.rotate_window_seconds * 1_000_000_000
