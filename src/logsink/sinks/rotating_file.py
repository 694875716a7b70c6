"""Rotating file sink: time-windowed archival of a single log file.

Rotation is lazy. It is checked only when a record arrives, never on a
timer, so a sink that sees no records during a window rotates on the
next record instead, once, no matter how many windows went by.

The record timestamp only triggers a rotation. The next boundary and
the archive name come from the wall clock, so a burst of delayed
records crosses at most one boundary.

Lifecycle:
    OPEN         handle valid, records are appended
    UNAVAILABLE  the last open attempt failed, records are dropped
    CLOSED       close() was called, records are dropped

Between closing the old handle and renaming it, the sink is briefly
without a handle. That state never outlives a single output_log() call.
"""

from __future__ import annotations

import os
import time
from datetime import datetime
from enum import StrEnum
from typing import BinaryIO, Callable

from logsink._diagnostics import report
from logsink.logging import get_logger

_LOGGER_NAME = "logsink.file"

HOUR = 3600 * 1_000_000_000

FILE_MODE = 0o644
DIR_MODE = 0o755
ARCHIVE_TIME_FORMAT = "%Y%m%d%H%M"


class SinkState(StrEnum):
    OPEN = "open"
    UNAVAILABLE = "unavailable"
    CLOSED = "closed"


def next_boundary(now: int, window_size: int) -> int:
    """Smallest window boundary strictly greater than now."""
    return (now // window_size + 1) * window_size


def archive_path(path: str, now: int) -> str:
    """path + "." + local wall-clock minute of now (nanoseconds)."""
    stamp = datetime.fromtimestamp(now / 1_000_000_000).strftime(ARCHIVE_TIME_FORMAT)
    return f"{path}.{stamp}"


def _free_archive_path(candidate: str) -> str:
    """First of candidate, candidate.1, candidate.2, ... not on disk."""
    if not os.path.lexists(candidate):
        return candidate
    seq = 1
    while os.path.lexists(f"{candidate}.{seq}"):
        seq += 1
    return f"{candidate}.{seq}"


class RotatingFileSink:
    """Append records to path, archiving it at each window boundary.

    Filesystem failures are reported on stderr and never raised: a
    sink that cannot open its file keeps accepting records and drops
    them until a later rotation opens the file again.
    """

    def __init__(
        self,
        path: str,
        window_size: int = HOUR,
        clock: Callable[[], int] | None = None,
    ) -> None:
        if window_size <= 0:
            raise ValueError(f"window_size must be positive, got {window_size}")
        self._path = os.fspath(path)
        self._window_size = window_size
        self._clock = clock or time.time_ns
        self._handle: BinaryIO | None = None
        self._archive_to = ""
        self._closed = False

        self._ensure_dir()
        self._open()
        self._rotate_after = next_boundary(self._clock(), self._window_size)

    # -- introspection -----------------------------------------------------

    @property
    def path(self) -> str:
        return self._path

    @property
    def window_size(self) -> int:
        return self._window_size

    @property
    def rotate_after(self) -> int:
        return self._rotate_after

    @property
    def archive_to(self) -> str:
        """Where the currently open file goes at the next rotation."""
        return self._archive_to

    @property
    def state(self) -> SinkState:
        if self._closed:
            return SinkState.CLOSED
        if self._handle is None:
            return SinkState.UNAVAILABLE
        return SinkState.OPEN

    # -- LogOutput ---------------------------------------------------------

    def output_log(self, level: int, timestamp: int, formatted: bytes) -> None:
        if self._closed:
            return
        if timestamp > self._rotate_after:
            self._rotate_after = next_boundary(self._clock(), self._window_size)
            self._archive()
            self._open()
        if self._handle is not None:
            try:
                self._handle.write(formatted)
            except (OSError, ValueError):
                pass  # silently dropped

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._close_handle()
        get_logger(_LOGGER_NAME).debug("sink.closed", path=self._path)

    # -- internals ---------------------------------------------------------

    def _ensure_dir(self) -> None:
        parent = os.path.dirname(self._path)
        if not parent:
            return
        try:
            os.makedirs(parent, mode=DIR_MODE, exist_ok=True)
        except OSError as e:
            report(f"failed to create dir for log file: {parent}", e)

    def _open(self) -> None:
        now = self._clock()
        try:
            fd = os.open(
                self._path, os.O_APPEND | os.O_WRONLY | os.O_CREAT, FILE_MODE
            )
            self._handle = os.fdopen(fd, "ab", buffering=0)
        except OSError as e:
            self._handle = None
            report(f"failed to open log file: {self._path}", e)
        else:
            get_logger(_LOGGER_NAME).debug("sink.opened", path=self._path)
        self._archive_to = archive_path(self._path, now)

    def _close_handle(self) -> None:
        if self._handle is None:
            return
        try:
            self._handle.close()
        except OSError:
            pass
        self._handle = None

    def _archive(self) -> None:
        self._close_handle()
        target = _free_archive_path(self._archive_to)
        try:
            os.rename(self._path, target)
        except OSError as e:
            report(f"failed to rename to archived log file: {target}", e)
            return
        get_logger(_LOGGER_NAME).debug(
            "sink.rotated", path=self._path, archive=target
        )
