"""Structured logging configuration.

structlog is bridged onto the standard library root logger and writes to
stderr, keeping stdout for the command's own output:
- Pretty console output by default
- JSON lines when AGGREGATOR_LOG_FORMAT=json

Usage:
    from openapi_aggregator.logging import configure_logging, get_logger

    configure_logging()
    log = get_logger(__name__)
    log.warning("readme_not_written", path="README.md")
"""

from __future__ import annotations

import logging
import os
import sys

import structlog
from structlog.types import Processor

__all__ = [
    "configure_logging",
    "get_logger",
]

LOG_FORMAT_ENV_VAR = "AGGREGATOR_LOG_FORMAT"
LOG_LEVEL_ENV_VAR = "AGGREGATOR_LOG_LEVEL"

# Success messages go to stdout, so logs stay quiet unless asked.
DEFAULT_LOG_LEVEL = "WARNING"


def _get_log_level() -> int:
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else logging.WARNING


def _is_json_output() -> bool:
    return os.environ.get(LOG_FORMAT_ENV_VAR, "").lower() == "json"


def _get_shared_processors() -> list[Processor]:
    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def configure_logging(*, force_json: bool = False, level: int | None = None) -> None:
    """Configure structlog and the stdlib root logger.

    Safe to call more than once; existing root handlers are replaced.

    Args:
        force_json: Emit JSON regardless of AGGREGATOR_LOG_FORMAT.
        level: Override the level read from AGGREGATOR_LOG_LEVEL.
    """
    use_json = force_json or _is_json_output()
    log_level = level if level is not None else _get_log_level()

    renderer: Processor
    if use_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_get_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
            foreign_pre_chain=_get_shared_processors(),
        )
    )
    root_logger.addHandler(handler)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    log: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return log
