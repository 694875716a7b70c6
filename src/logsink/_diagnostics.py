"""Best-effort diagnostic lines on the process error stream."""

from __future__ import annotations

import sys


def report(message: str, err: BaseException | None = None) -> None:
    """Write one human-readable line to stderr. Never raises."""
    line = message if err is None else f"{message}, {err}"
    try:
        sys.stderr.write(line + "\n")
        sys.stderr.flush()
    except (OSError, ValueError):
        pass
