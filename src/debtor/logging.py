from __future__ import annotations

import logging
import sys

import structlog

VERBOSITY_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def level_for(verbosity: int) -> int:
    return VERBOSITY_LEVELS[max(0, min(verbosity, len(VERBOSITY_LEVELS) - 1))]


def configure_logging(verbosity: int = 0, fmt: str = "console") -> None:
    level = level_for(verbosity)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        stream=sys.stderr,
    )

    renderer = structlog.processors.JSONRenderer() if fmt == "json" else structlog.dev.ConsoleRenderer(colors=False)
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Logger for library code.

    Until ``configure_logging`` runs, events go through the stdlib logger of the same name
    rather than structlog's default printer, so callers embedding the solver get nothing on
    stdout and only warnings on stderr.
    """
    if not structlog.is_configured():
        return structlog.wrap_logger(
            logging.getLogger(name),
            processors=[structlog.processors.add_log_level, structlog.dev.ConsoleRenderer(colors=False)],
        )
    return structlog.get_logger(name)
