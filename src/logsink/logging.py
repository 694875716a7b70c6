"""Structured logging: swappable formatter, sink-backed destination.

Architecture:
    LogFormatter  HOW records are structured (structlog, stdlib)
    SinkHandler   WHERE they go: a logging.Handler that feeds a LogOutput

    setup_logging(config, registry) composes them: formatter.setup()
    returns a logging.Formatter, the registry opens the configured
    destination, and a SinkHandler wrapping that sink is attached to
    the root logger. Every logging.getLogger() in the process then ends
    up in the rotating file or on the console.

Swapping:
    LOGSINK_LOG_FORMATTER=structlog   (default)
    LOGSINK_LOG_FORMATTER=stdlib

    Or register your own:
        from logsink.logging import register_formatter
        register_formatter("mine", MyFormatter)
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from logsink.levels import from_stdlib_level

if TYPE_CHECKING:
    from logsink.config import SinkConfig
    from logsink.registry import SinkRegistry
    from logsink.sinks.base import LogOutput

# Records from these loggers never reach a SinkHandler
INTERNAL_NAMESPACE = "logsink"


# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------


@runtime_checkable
class LogFormatter(Protocol):
    """Strategy: how log records are structured.

    setup() configures the formatting pipeline and returns a
    logging.Formatter that handlers will use.

    get_logger() returns a logger with the right API (structlog's
    key=value kwargs for structlog, stdlib's %-formatting for stdlib).
    """

    def setup(self, config: SinkConfig) -> logging.Formatter: ...

    def get_logger(self, name: str, **kwargs: Any) -> Any: ...


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------


class StructlogFormatter:
    """structlog processor pipeline + stdlib bridge.

    The level is left out of the rendered line: sinks already receive
    it separately and the console sink prints its own colored tag.
    """

    def setup(self, config: SinkConfig) -> logging.Formatter:
        import structlog

        shared_processors: list = [
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
        ]

        if config.log_format == "console":
            renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer(
                colors=False
            )
        else:
            renderer = structlog.processors.JSONRenderer()

        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                *shared_processors,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

        return structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )

    def get_logger(self, name: str, **kwargs: Any) -> Any:
        import structlog

        return structlog.get_logger(name, **kwargs)


class StdlibFormatter:
    """Pure stdlib logging, plain text or JSON."""

    def setup(self, config: SinkConfig) -> logging.Formatter:
        if config.log_format == "console":
            return logging.Formatter(
                "%(asctime)s %(name)s: %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        return _StdlibJsonFormatter()

    def get_logger(self, name: str, **kwargs: Any) -> Any:
        return _StructuredStdlibLogger(logging.getLogger(name))


class _StdlibJsonFormatter(logging.Formatter):
    """JSON formatter for stdlib logging (no structlog dependency)."""

    def format(self, record: logging.LogRecord) -> str:
        d: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%SZ"),
            "logger": record.name,
            "event": record.getMessage(),
        }
        if hasattr(record, "_structured"):
            d.update(record._structured)  # type: ignore[union-attr]
        if record.exc_info and record.exc_info[1]:
            d["exception"] = self.formatException(record.exc_info)
        return json.dumps(d, default=str)


class _StructuredStdlibLogger:
    """Wrapper that gives stdlib loggers a structlog-like kwargs API.

    logger.debug("sink.rotated", path=..., archive=...) works the same
    before and after setup_logging(); the kwargs ride on the LogRecord.
    """

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def _log(self, level: int, event: str, **kwargs: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return
        record = self._logger.makeRecord(
            self._logger.name,
            level,
            "(unknown)",
            0,
            event,
            (),
            None,
        )
        record._structured = kwargs  # type: ignore[attr-defined]
        self._logger.handle(record)

    def debug(self, event: str, **kw: Any) -> None:
        self._log(logging.DEBUG, event, **kw)

    def info(self, event: str, **kw: Any) -> None:
        self._log(logging.INFO, event, **kw)

    def warning(self, event: str, **kw: Any) -> None:
        self._log(logging.WARNING, event, **kw)

    def error(self, event: str, **kw: Any) -> None:
        self._log(logging.ERROR, event, **kw)

    def critical(self, event: str, **kw: Any) -> None:
        self._log(logging.CRITICAL, event, **kw)


# ---------------------------------------------------------------------------
# Handler
# ---------------------------------------------------------------------------


class _ExcludeInternal(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        return not (
            name == INTERNAL_NAMESPACE or name.startswith(INTERNAL_NAMESPACE + ".")
        )


class SinkHandler(logging.Handler):
    """Bridge stdlib logging into a LogOutput.

    Each record becomes one newline-terminated line stamped with its
    creation time in nanoseconds.
    """

    def __init__(self, sink: LogOutput, fmt: logging.Formatter | None = None) -> None:
        super().__init__()
        if fmt is not None:
            self.setFormatter(fmt)
        self.addFilter(_ExcludeInternal())
        self._sink = sink

    @property
    def sink(self) -> LogOutput:
        return self._sink

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = self.format(record) + "\n"
            self._sink.output_log(
                from_stdlib_level(record.levelno),
                int(record.created * 1_000_000_000),
                line.encode("utf-8"),
            )
        except Exception:
            self.handleError(record)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_FORMATTERS: dict[str, type] = {
    "structlog": StructlogFormatter,
    "stdlib": StdlibFormatter,
}


def register_formatter(name: str, cls: type) -> None:
    """Register a custom log formatter. Call before setup_logging()."""
    _FORMATTERS[name] = cls


# ---------------------------------------------------------------------------
# Module state
# ---------------------------------------------------------------------------

_active_formatter: LogFormatter | None = None
_active_handler: SinkHandler | None = None


def setup_logging(config: SinkConfig, registry: SinkRegistry) -> SinkHandler:
    """Route the root logger into the sink configured by config.

    The sink is opened through registry, which keeps owning it. Calling
    this again replaces the previously managed handler and leaves any
    foreign handlers (pytest caplog, monitoring agents) alone.
    """
    global _active_formatter, _active_handler

    formatter_cls = _FORMATTERS.get(config.log_formatter)
    if formatter_cls is None:
        raise ValueError(
            f"Unknown log formatter: {config.log_formatter!r}. "
            f"Available: {list(_FORMATTERS)}. "
            f"Register custom formatters with register_formatter()."
        )

    formatter = formatter_cls()
    log_formatter = formatter.setup(config)
    sink = registry.open(config.destination, window_size=config.window_size_ns)
    handler = SinkHandler(sink, log_formatter)

    handler._logsink_managed = True  # type: ignore[attr-defined]
    root_logger = logging.getLogger()
    root_logger.handlers = [
        h for h in root_logger.handlers
        if not getattr(h, "_logsink_managed", False)
    ]
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))

    _active_formatter = formatter
    _active_handler = handler
    return handler


def get_logger(name: str = "", **kwargs: Any) -> Any:
    """Get a logger from the active formatter.

    Falls back to a _StructuredStdlibLogger wrapper before
    setup_logging() is called, so structured kwargs work even
    pre-configuration.
    """
    if _active_formatter is not None:
        return _active_formatter.get_logger(name, **kwargs)
    return _StructuredStdlibLogger(logging.getLogger(name))


def shutdown_logging() -> None:
    """Detach the managed handler. The registry still owns the sink."""
    global _active_formatter, _active_handler

    if _active_handler is not None:
        logging.getLogger().removeHandler(_active_handler)
    _active_formatter = None
    _active_handler = None
