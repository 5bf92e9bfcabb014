"""Logging setup for command line entry points.

The library itself only creates module loggers; applications embedding it
configure logging their own way.
"""

from __future__ import annotations

import logging
import sys

import structlog

from evatr.config import settings


def configure_logging(level: str | None = None) -> None:
    """Route stdlib and structlog output to stdout at ``level`` (default: ``EVATR_LOG_LEVEL``)."""
    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper()),
        format="%(asctime)s %(levelname)-8s %(name)s - %(message)s",
        stream=sys.stdout,
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )
