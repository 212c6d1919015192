"""Unit tests for defaults and logging setup."""

import logging

import pytest

from featuresteps.config import (
    BOXCOX_EPS,
    BOXCOX_LIMITS,
    BOXCOX_NUNIQUE,
    DEFAULT_HOLIDAYS,
    LOGGER_NAME,
    configure_logging,
)
from featuresteps.transformers import BoxCoxTransformer, HolidayFeatures


@pytest.fixture
def package_logger():
    logger = logging.getLogger(LOGGER_NAME)
    saved_level = logger.level
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(saved_level)


def test_defaults_flow_into_steps():
    bc = BoxCoxTransformer()
    assert bc.limits == BOXCOX_LIMITS == (-5.0, 5.0)
    assert bc.nunique == BOXCOX_NUNIQUE == 5
    assert bc.eps == BOXCOX_EPS
    assert tuple(HolidayFeatures().holidays) == DEFAULT_HOLIDAYS


def test_configure_logging_console(package_logger):
    logger = configure_logging(logging.DEBUG)
    assert logger is package_logger
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1


def test_configure_logging_is_idempotent(package_logger):
    configure_logging(logging.INFO)
    logger = configure_logging(logging.WARNING)
    assert len(logger.handlers) == 1
    assert all(h.level == logging.WARNING for h in logger.handlers)


def test_configure_logging_writes_file(package_logger, tmp_path):
    log_file = tmp_path / "steps.log"
    logger = configure_logging(logging.INFO, log_path=log_file)
    assert len(logger.handlers) == 2

    logging.getLogger(f"{LOGGER_NAME}.transformers").info("hello from a step")
    for handler in logger.handlers:
        handler.flush()
    assert "hello from a step" in log_file.read_text(encoding="utf-8")
