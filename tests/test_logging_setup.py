import sys

import pytest
from loguru import logger

from grade_quiz import logging_setup
from grade_quiz.logging_setup import configure_logging


@pytest.fixture(autouse=True)
def _restore_logger(monkeypatch):
    monkeypatch.setattr(logging_setup, '_configured_level', None)
    yield
    logger.remove()
    logger.add(sys.stderr)


def test_same_level_does_not_add_sinks(capsys):
    configure_logging('debug')
    configure_logging('DEBUG')
    assert len(logger._core.handlers) == 1

    logger.debug('sink-check')
    assert capsys.readouterr().err.count('sink-check') == 1


def test_level_change_replaces_sink(capsys):
    configure_logging('DEBUG')
    configure_logging('INFO')
    assert len(logger._core.handlers) == 1

    logger.debug('hidden-debug')
    logger.info('shown-info')
    err = capsys.readouterr().err
    assert 'hidden-debug' not in err
    assert 'shown-info' in err
