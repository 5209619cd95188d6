"""Tests for logging setup."""

import pytest
from loguru import logger

from mapvalidator.logs import configure_logging


@pytest.mark.parametrize(
    "verbosity,level", [(-1, "WARNING"), (0, "WARNING"), (1, "INFO"), (2, "DEBUG"), (7, "DEBUG")]
)
def test_verbosity_levels(verbosity, level):
    try:
        assert configure_logging(verbosity) == level
    finally:
        logger.remove()
