"""Shared test fixtures."""

import logging

import pytest

from responsive_images import logging as ri_logging


@pytest.fixture(autouse=True)
def reset_logger():
    """Reset the package logger so handlers never outlive a captured stream."""
    ri_logging._logger = None
    logging.getLogger(ri_logging.LOGGER_NAME).handlers.clear()
    yield
    ri_logging._logger = None
    logging.getLogger(ri_logging.LOGGER_NAME).handlers.clear()
