"""
Tests for get_logger.
"""

import logging

import pytest

from pypolyfit.core.logger import get_logger


def test_console_handler_not_stacked():
    logger = get_logger("pypolyfit.test_console")
    get_logger("pypolyfit.test_console")
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)


def test_file_mode_writes_under_logs(tmp_path):
    logger = get_logger("pypolyfit.test_file", "file", str(tmp_path), level=logging.DEBUG)
    logger.debug("hello")
    logger.handlers[0].flush()
    logs = list((tmp_path / "logs").glob("*-pypolyfit.test_file.log"))
    assert len(logs) == 1
    assert "hello" in logs[0].read_text()
    logger.handlers[0].close()


def test_level_applied():
    logger = get_logger("pypolyfit.test_level", level=logging.WARNING)
    assert logger.level == logging.WARNING


def test_unknown_mode():
    with pytest.raises(ValueError, match="Unknown logger mode"):
        get_logger("pypolyfit.test_bad", "syslog")
