"""Logging setup for the command line."""

import sys

from loguru import logger

_LEVELS = ("WARNING", "INFO", "DEBUG")


def configure_logging(verbosity: int = 0) -> str:
    """Route loguru output to stderr at a level chosen by verbosity.

    0 shows warnings, 1 adds progress, 2 and above adds per-primitive detail.

    Returns:
        The level name in effect.
    """
    level = _LEVELS[min(max(verbosity, 0), len(_LEVELS) - 1)]
    logger.remove()
    logger.add(sys.stderr, level=level)
    return level
