"""Fixtures for srcbuild_logging tests."""

import logging
import uuid
from collections.abc import Iterator

import pytest


@pytest.fixture
def clean_logger() -> Iterator[logging.Logger]:
    """Provide a uniquely named logger and close its handlers afterwards."""
    logger = logging.getLogger(f"srcbuild_test_{uuid.uuid4().hex[:8]}")
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
