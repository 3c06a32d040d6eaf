"""Centralized logging configuration for the DECAES runner."""

import os
import sys
import logging
from typing import Optional

LOGGER_NAME = "decaes-runner"


def _resolve_level(level: Optional[str]) -> int:
    name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    return getattr(logging, name, logging.INFO)


def setup_logger(
    name: str = LOGGER_NAME,
    level: Optional[str] = None,
    format_type: str = "structured",
) -> logging.Logger:
    """
    Setup centralized logging with environment variable configuration.

    The first call for a name attaches a stdout handler and sets the level
    from ``level`` or ``LOG_LEVEL``. Later calls only change the level when
    ``level`` is given, so a level chosen on the command line sticks.

    Args:
        name: Logger name (defaults to "decaes-runner")
        level: Log level override (defaults to env var or INFO)
        format_type: Logging format ("structured" or "simple")

    Returns:
        Configured logger instance

    Environment Variables:
        LOG_LEVEL: Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        LOG_FORMAT: Set format type ("structured" or "simple")
    """
    logger = logging.getLogger(name)
    configured = getattr(logger, "_decaes_configured", False)

    if level or not configured:
        logger.setLevel(_resolve_level(level))

    if not configured:
        handler = logging.StreamHandler(sys.stdout)

        env_format = os.getenv("LOG_FORMAT", format_type).lower()

        if env_format == "structured":
            formatter = logging.Formatter(
                "%(asctime)s | %(name)s | %(levelname)-8s | "
                "%(filename)s:%(lineno)d | %(funcName)s() | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        else:
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )

        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger._decaes_configured = True  # type: ignore[attr-defined]

    # Child output shares stdout; keep our lines from being emitted twice
    logger.propagate = False
    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Get a configured logger without touching the level of an existing one."""
    return setup_logger(name)


def configure_cli_logging(debug: bool = False) -> logging.Logger:
    """Logging for the ``decaes-runner`` command; ``debug`` forces DEBUG."""
    return setup_logger(LOGGER_NAME, level="DEBUG" if debug else None)


# Create default logger instance
logger = setup_logger()
