"""Fixtures for infrastructure.logging tests."""

import logging

import pytest


@pytest.fixture
def restore_root_level():
    """Restore the root logger level changed by a test."""
    level = logging.root.level
    yield
    logging.root.setLevel(level)


@pytest.fixture
def detach_file_handlers():
    """Remove rotating file handlers a test attached to the root logger."""
    before = list(logging.root.handlers)
    yield
    for handler in list(logging.root.handlers):
        if handler not in before:
            logging.root.removeHandler(handler)
            handler.close()
