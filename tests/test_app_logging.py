"""Tests for logging configuration."""

import logging

from mfp_bridge.app_logging import configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger("mfp_bridge")
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging("DEBUG")
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
