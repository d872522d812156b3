"""Tests for the package logger setup."""

import logging

import pytest

from forcegraph3d.logging_config import setup_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger("forcegraph3d")
    level, handlers = logger.level, list(logger.handlers)
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)


def test_repeated_setup_keeps_one_console_handler(package_logger) -> None:
    setup_logging(logging.DEBUG)
    setup_logging(logging.DEBUG)

    assert len(package_logger.handlers) == 1
    assert package_logger.level == logging.DEBUG


def test_log_file_receives_package_records(package_logger, tmp_path) -> None:
    path = tmp_path / "viewer.log"

    setup_logging(logging.INFO, log_file=str(path))
    logging.getLogger("forcegraph3d.controller.engine").info("Simulation loop started.")
    for handler in package_logger.handlers:
        handler.flush()

    text = path.read_text(encoding="utf-8")
    assert len(package_logger.handlers) == 2
    assert "forcegraph3d.controller.engine - INFO - Simulation loop started." in text
