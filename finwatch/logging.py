"""Structured logging for finwatch.

The CLI configures logging once at startup; every other module just asks for
a logger with get_logger(__name__).
"""

import logging
import sys
from typing import Any

import structlog

# Fields whose values never reach the log output (financial data)
REDACTED_FIELDS = {
    "amount",
    "limit",
    "spending",
}


def redact_amounts(logger: logging.Logger, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Replace monetary values in a log event."""
    for key in REDACTED_FIELDS.intersection(event_dict):
        event_dict[key] = "***REDACTED***"
    return event_dict


def configure_logging(
    *,
    json_output: bool = False,
    log_level: str = "WARNING",
) -> None:
    """Configure structured logging for the application.

    Args:
        json_output: If True, output JSON logs. If False, human-readable console logs.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).

    Raises:
        ValueError: If log_level is not a known level name.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level!r}")

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
    )

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        redact_amounts,
    ]

    if json_output:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for the given module."""
    return structlog.get_logger(name)
