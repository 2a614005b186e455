"""Tests for logging configuration."""

import logging

from mpl_site.app_logging import configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger("mpl_site")
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging(logging.DEBUG)
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1
    assert logger.level == logging.DEBUG
    assert not logger.propagate


def test_level_names_and_httpx_quieting() -> None:
    configure_logging("warning")

    assert logging.getLogger("mpl_site").level == logging.WARNING
    assert logging.getLogger("httpx").level == logging.WARNING

    configure_logging("debug")

    assert logging.getLogger("httpx").level == logging.DEBUG
