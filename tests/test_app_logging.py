"""Tests for logging configuration."""

import logging

from wellness_nutrition.app_logging import configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger("wellness_nutrition")
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging()
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1
    assert logger.propagate is False


def test_configure_logging_sets_level() -> None:
    logger = logging.getLogger("wellness_nutrition")

    configure_logging(logging.DEBUG)

    assert logger.level == logging.DEBUG
    configure_logging()
