"""Pytest configuration and shared fixtures for result-kit tests."""

import logging

import pytest

from result_kit import _config
from result_kit._logging import LOGGER_NAME, clear_log_hooks


@pytest.fixture(autouse=True)
def reset_config():
    """Start and end every test with the default configuration."""
    _config._reset()
    yield
    _config._reset()
    clear_log_hooks()
    _reset_library_logger()


def _reset_library_logger() -> None:
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


class Opaque:
    """Object with neither __str__ nor __repr__ of its own."""


class ForeignError:
    """Error object from another library: name, message and a string form."""

    def __init__(self, message: str) -> None:
        self.name = 'ForeignError'
        self.message = message

    def __str__(self) -> str:
        return f'{self.name}: {self.message}'


@pytest.fixture
def opaque():
    return Opaque()


@pytest.fixture
def foreign_error():
    return ForeignError('upstream failed')
