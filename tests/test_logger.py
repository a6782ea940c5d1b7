"""Tests for logging setup."""

import logging

import pytest

from financeflow.utils.logger import configure_logging


def test_configure_logging_sets_level_and_single_handler():
    configure_logging("info")
    logger = configure_logging("DEBUG")

    assert logger.name == "financeflow"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert logger.propagate is False


def test_child_loggers_inherit_level():
    configure_logging("ERROR")

    assert logging.getLogger("financeflow.domain.analytics").getEffectiveLevel() == logging.ERROR


def test_unknown_level():
    with pytest.raises(ValueError, match="Unknown log level"):
        configure_logging("LOUD")
