import logging

import pytest


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logging so they don't outlive a test."""
    yield
    logger = logging.getLogger("dep_linker")
    logger.handlers = []
    logger.setLevel(logging.NOTSET)
