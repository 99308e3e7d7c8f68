"""structlog setup for the CLI and library callers.

Two output modes:
- "json": one JSON object per line, for piping into other tools
- "console": colored key=value output for interactive use

A run ID is injected into every entry via contextvars so all events of
one CLI invocation can be grouped. Instrument context (futures code,
chart period) is bound with bind_chart_context().
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import TextIO

import structlog

_run_id: ContextVar[str] = ContextVar("run_id", default="")


def set_run_id(run_id: str) -> None:
    """Set the run ID for the current context."""
    _run_id.set(run_id)


def get_run_id() -> str:
    """Get the run ID for the current context."""
    return _run_id.get()


def bind_chart_context(futures_code: str, period: str) -> None:
    """Attach instrument and period to every subsequent log entry."""
    structlog.contextvars.bind_contextvars(futures_code=futures_code, period=period)


def _add_run_id(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: structlog.types.EventDict,
) -> structlog.types.EventDict:
    run_id = get_run_id()
    if run_id:
        event_dict["run_id"] = run_id
    return event_dict


def setup_logging(
    level: str = "INFO",
    log_format: str = "console",
    stream: TextIO | None = None,
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: "json" or "console".
        stream: Output stream, stderr by default so stdout stays clean
            for command output.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        _add_run_id,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper()))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a named structlog logger."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
