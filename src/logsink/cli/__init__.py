"""logsink CLI -- typer-based command interface.

Commands:
    logsink pipe <dest>    Copy stdin lines into a sink (file or console)
    logsink levels         Show level names, values and colors
"""

from __future__ import annotations

import sys
import time

import typer

from logsink.cli._errors import handle_error
from logsink.levels import Level, level_color, level_name, with_color_level_prefix

app = typer.Typer(
    name="logsink",
    help="Route log lines to rotating files or colorized console streams.",
    no_args_is_help=True,
)


def _parse_level(raw: str) -> int:
    if raw.lstrip("-").isdigit():
        return int(raw)
    name = raw.upper()
    if name not in Level.__members__:
        handle_error(
            f"Unknown level: {raw!r}. Available: {[lv.name for lv in Level]}"
        )
    return Level[name]


@app.command()
def pipe(
    dest: str = typer.Argument(
        ..., help="Destination: STDOUT, STDERR or a log file path"
    ),
    level: str = typer.Option("INFO", "--level", "-l", help="Level name or number"),
    window: int = typer.Option(
        3600, "--window", "-w", help="Rotation window in seconds (file destinations)"
    ),
) -> None:
    """Copy stdin to a sink, one record per line.

    Examples:
        my-server 2>&1 | logsink pipe /var/log/my-server/out.log
        tail -f app.log | logsink pipe STDOUT --level WARN
    """
    from logsink.registry import SinkRegistry

    if window <= 0:
        handle_error(f"--window must be positive, got {window}")
    lv = _parse_level(level)

    with SinkRegistry(window_size=window * 1_000_000_000) as registry:
        sink = registry.open(dest)
        stdin = getattr(sys.stdin, "buffer", None)
        if stdin is None:
            stdin = (line.encode("utf-8", errors="replace") for line in sys.stdin)
        for line in stdin:
            if not line.endswith(b"\n"):
                line += b"\n"
            sink.output_log(lv, time.time_ns(), line)


@app.command()
def levels() -> None:
    """List every level with its value, color code and a sample tag."""
    typer.echo(f"{'Level':<8} {'Value':>5} {'Color':>5}  Sample")
    typer.echo("-" * 40)
    for lv in Level:
        sample = with_color_level_prefix(lv, b"").decode("ascii")
        typer.echo(f"{level_name(lv):<8} {int(lv):>5} {level_color(lv):>5}  {sample}")


def main() -> None:
    """Entry point for the logsink CLI."""
    app()
