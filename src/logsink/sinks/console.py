"""Console sink: colorized records on a standard stream."""

from __future__ import annotations

from typing import IO

from logsink.levels import with_color_level_prefix


class ConsoleSink:
    """Write records to a standard stream behind a colored [LEVEL] tag.

    The process owns the stream, so close() only flushes it.
    """

    def __init__(self, stream: IO[str]) -> None:
        self._stream = stream

    @property
    def stream(self) -> IO[str]:
        return self._stream

    def output_log(self, level: int, timestamp: int, formatted: bytes) -> None:
        data = with_color_level_prefix(level, formatted)
        try:
            buffer = getattr(self._stream, "buffer", None)
            if buffer is not None:
                # Drain pending text first so bytes land in call order
                self._stream.flush()
                buffer.write(data)
                buffer.flush()
            else:
                self._stream.write(data.decode("utf-8", errors="replace"))
                self._stream.flush()
        except (OSError, ValueError):
            pass  # fire-and-forget

    def close(self) -> None:
        try:
            self._stream.flush()
        except (OSError, ValueError):
            pass
