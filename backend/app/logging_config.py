"""structlog configuration module."""

import logging
import sys

import structlog


def setup_logging(debug: bool = False) -> None:
    """
    Configure structlog and stdlib logging for the host process.

    In debug mode: colored, human-readable console output.
    Otherwise: JSON lines, one event per prompt transition or lookup.

    Args:
        debug: If True, use ConsoleRenderer; otherwise use JSONRenderer.
    """

    shared_processors: list = [
        structlog.contextvars.merge_contextvars,  # session_id, project_id bound by the host
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if debug:
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    level = logging.DEBUG if debug else logging.INFO

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )

    # Hosts that still use logging.getLogger() get the same stream and level.
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )
