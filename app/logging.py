# app/logging.py
"""Structured logging for the Lawyer Agent.

Both the CLI and the API route their events through structlog. Console
output is the default; set LAWYER_AGENT_LOG_JSON=true to emit one JSON
object per line for log shippers.
"""

import logging
import sys

import structlog

from app.config import LOG_JSON

# Processors shared by the console and JSON renderers
_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


def configure_logging(*, debug: bool = False, json_logs: bool | None = None) -> None:
    """Set up stdlib logging and structlog for CLI or server use.

    Args:
        debug: Emit DEBUG events when True, otherwise INFO and above.
        json_logs: Render events as JSON lines. Defaults to LOG_JSON.
    """
    level = logging.DEBUG if debug else logging.INFO
    if json_logs is None:
        json_logs = LOG_JSON

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)
    logging.getLogger().setLevel(level)

    # uvicorn's access log duplicates request_completed events
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    renderer: structlog.types.Processor
    if json_logs:
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*_SHARED_PROCESSORS, renderer],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to ``name``."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
