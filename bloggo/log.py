"""structlog configuration for Bloggo.

Logging is set up once, by the CLI. Log lines go to stderr through the
standard library's logging module, rendered by structlog's console
renderer. The ``bloggo`` logger logs warnings by default, info with
--verbose, and whatever level BLOGGO_LOG names when it is set.
"""

from __future__ import annotations

import logging
import os
import sys

import structlog

from .config import ENV_LOG_LEVEL


def resolve_level(verbose: bool = False, env_level: str | None = None) -> int:
    """Pick the log level for the bloggo logger.

    Args:
        verbose: Whether --verbose was given.
        env_level: Value of BLOGGO_LOG, if any. A valid level name wins
            over verbose.

    Returns:
        A logging level number.
    """
    if env_level:
        level = logging.getLevelName(env_level.strip().upper())
        if isinstance(level, int):
            return level
    return logging.INFO if verbose else logging.WARNING


def configure_logging(*, verbose: bool = False) -> None:
    """Configure structlog processors and output routing.

    Args:
        verbose: Enable INFO-level output. When False, only WARNING+.
    """
    level = resolve_level(verbose, os.environ.get(ENV_LOG_LEVEL))

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("bloggo").setLevel(level)
