"""Feature-level fixtures for command framework tests."""

import pytest

from infrastructure.commands.arguments import create_arguments_registry
from infrastructure.commands.context import ParserContext
from infrastructure.commands.registry import CommandRegistry


@pytest.fixture
def arguments():
    """ArgumentsRegistry with the built-in parsers."""
    return create_arguments_registry()


@pytest.fixture
def command_registry(arguments):
    """Empty CommandRegistry backed by the built-in parsers."""
    return CommandRegistry(arguments)


@pytest.fixture
def parser_context_factory(user_store):
    """Factory binding parser contexts to a message.

    Returns:
        Callable(message) returning a context factory (raw, index, tokens)
    """

    def _factory(message):
        def _context(raw, index, tokens):
            return ParserContext(
                raw=raw,
                index=index,
                tokens=tuple(tokens),
                message=message,
                users=user_store,
                caller_id=message.sender_id,
            )

        return _context

    return _factory
