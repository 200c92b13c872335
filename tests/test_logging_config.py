"""Tests for logging setup."""

import logging

from common.constants import APP_NAME
from common.logging_config import get_logger, setup_logging


def test_setup_logging_configures_application_logger():
    logger = setup_logging(APP_NAME, log_level='debug')

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert logger.propagate is False

    setup_logging(APP_NAME, log_level='WARNING')
    assert len(logger.handlers) == 1
    assert logger.handlers[0].level == logging.WARNING


def test_setup_logging_reads_env_level(monkeypatch):
    monkeypatch.setenv('LOG_LEVEL', 'error')

    logger = setup_logging(APP_NAME)

    assert logger.level == logging.ERROR


def test_get_logger_is_child_of_application_logger():
    assert get_logger('replicator.tree_replicator').name == f'{APP_NAME}.replicator.tree_replicator'
