"""structlog setup for applications embedding the decimal engine.

The library itself only calls ``structlog.get_logger()``; nothing is
configured at import time. Hosts that want console output call
``configure_logging`` once at startup.
"""

import logging

import structlog


def configure_logging(level: str = "INFO") -> None:
    """Configure structlog with a console renderer and a level filter.

    Args:
        level: Standard logging level name (e.g. "DEBUG", "INFO")

    Raises:
        ValueError: If level is not a known logging level name
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level}")

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )
