"""Tests for debug log file setup."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from hlp.l4_frameworks_and_drivers.logging_setup import setup_file_logging


@pytest.fixture
def restore_hlp_logger():
    logger = logging.getLogger('hlp')
    handlers, level = list(logger.handlers), logger.level
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers = handlers
    logger.setLevel(level)


class TestSetupFileLogging:
    def test_creates_log_file(self, tmp_path: Path, restore_hlp_logger):
        log_dir = tmp_path / 'logs'
        log_path = setup_file_logging(log_dir)

        assert log_path == log_dir / 'hlp_debug.log'
        assert log_path.exists()

    def test_child_loggers_write_to_file(self, tmp_path: Path, restore_hlp_logger):
        log_path = setup_file_logging(tmp_path)
        logging.getLogger('hlp.session').debug('prompt reached')
        for handler in restore_hlp_logger.handlers:
            handler.flush()

        text = log_path.read_text(encoding='utf-8')
        assert 'DEBUG hlp.session prompt reached' in text
        assert 'Debug logging started' in text
