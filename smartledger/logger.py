"""
Structured Logging

Every module logs through structlog with snake_case event names
(e.g. "snapshot_write_failed") and keyword context, rendered as JSON.
Failures that are swallowed by design (storage, AI) are always logged here
so they stay diagnosable.
"""

import logging

import structlog


structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """
    Route structlog output through the standard library at the given level.

    structlog's filter_by_level defers to the stdlib logger's level,
    so this must run once at startup for INFO events to appear.
    """
    logging.basicConfig(format="%(message)s", level=level.upper())
    logging.getLogger("smartledger").setLevel(level.upper())


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a named structured logger."""
    return structlog.get_logger(name)
