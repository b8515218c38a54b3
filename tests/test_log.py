"""Tests for logging setup."""

import json
import logging

from dep_linker.log import StructuredFormatter, setup_logging


def test_setup_replaces_handlers():
    setup_logging("debug")
    logger = setup_logging("warning")
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING


def test_unknown_level_falls_back_to_info():
    assert setup_logging("chatty").level == logging.INFO


def test_structured_formatter():
    logger = setup_logging("info", structured=True)
    assert isinstance(logger.handlers[0].formatter, StructuredFormatter)

    record = logging.LogRecord("dep_linker.test", logging.INFO, __file__, 1, "linked %s", ("a",), None)
    data = json.loads(StructuredFormatter().format(record))
    assert data["level"] == "INFO"
    assert data["logger"] == "dep_linker.test"
    assert data["message"] == "linked a"
