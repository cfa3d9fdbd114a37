"""Fixtures for feature module tests."""

import pytest

from infrastructure.commands import (
    CommandPipeline,
    CommandRegistry,
    create_arguments_registry,
)
from infrastructure.configuration import Settings


@pytest.fixture
def settings():
    """Settings of a bot running image 1.2.0 built from commit abc123."""
    return Settings(DOCKER_VERSION="1.2.0", GIT_SHA="abc123")


@pytest.fixture
def commands():
    return CommandRegistry(create_arguments_registry())


@pytest.fixture
def pipeline(commands, user_store):
    return CommandPipeline(commands, user_store)
