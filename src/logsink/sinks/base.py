"""LogOutput protocol: strategy pattern for record destinations."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

# Reserved destination descriptors that select the standard streams
STDOUT = "STDOUT"
STDERR = "STDERR"


@runtime_checkable
class LogOutput(Protocol):
    """Where byte-formatted records get written.

    Implementations are not internally synchronized. Callers serialize
    calls to a given instance.
    """

    def output_log(self, level: int, timestamp: int, formatted: bytes) -> None: ...

    def close(self) -> None: ...
