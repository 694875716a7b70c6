"""Sink registry: one sink per destination, explicitly owned.

Instead of process-wide default sinks, the application constructs a
SinkRegistry at startup and passes it to whatever needs to write logs.
The registry owns every sink it opens and closes them on close_all().

    with SinkRegistry() as sinks:
        out = sinks.open("/var/log/app/app.log")
        out.output_log(Level.INFO, time.time_ns(), b"started\\n")
"""

from __future__ import annotations

import os
from typing import Callable

from logsink.destination import is_console, new_log_output
from logsink.logging import get_logger
from logsink.sinks.base import LogOutput
from logsink.sinks.rotating_file import HOUR

_LOGGER_NAME = "logsink.registry"


class SinkRegistry:
    """Map destination descriptors to their single live sink."""

    def __init__(
        self,
        window_size: int = HOUR,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self._window_size = window_size
        self._clock = clock
        self._sinks: dict[str, LogOutput] = {}

    @staticmethod
    def _key(descriptor: str) -> str:
        if is_console(descriptor):
            return descriptor
        return os.path.abspath(descriptor)

    def open(self, descriptor: str, window_size: int | None = None) -> LogOutput:
        """Return the sink for descriptor, creating it on first use.

        window_size overrides the registry default for a newly created
        sink. An already open sink is returned as is.
        """
        key = self._key(descriptor)
        sink = self._sinks.get(key)
        if sink is None:
            sink = new_log_output(
                descriptor,
                window_size=window_size or self._window_size,
                clock=self._clock,
            )
            self._sinks[key] = sink
            get_logger(_LOGGER_NAME).debug("registry.opened", destination=key)
        return sink

    def get(self, descriptor: str) -> LogOutput | None:
        return self._sinks.get(self._key(descriptor))

    def descriptors(self) -> list[str]:
        return list(self._sinks)

    def close(self, descriptor: str) -> None:
        """Close and forget one sink. Unknown descriptors are ignored."""
        sink = self._sinks.pop(self._key(descriptor), None)
        if sink is not None:
            sink.close()

    def close_all(self) -> None:
        sinks, self._sinks = self._sinks, {}
        for sink in sinks.values():
            sink.close()
        get_logger(_LOGGER_NAME).debug("registry.closed", count=len(sinks))

    def __contains__(self, descriptor: object) -> bool:
        return isinstance(descriptor, str) and self._key(descriptor) in self._sinks

    def __len__(self) -> int:
        return len(self._sinks)

    def __enter__(self) -> SinkRegistry:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close_all()
