import logging
import sys

import structlog


def configure_logging(level: str = "INFO"):
    try:
        loglevel = getattr(logging, level.upper())
    except AttributeError:
        loglevel = logging.INFO

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(loglevel),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
