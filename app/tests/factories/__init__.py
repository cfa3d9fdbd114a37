"""Test data factories for deterministic test data generation."""

from tests.factories.commands import (
    make_arg_spec,
    make_command,
    make_command_context,
    make_descriptor,
)
from tests.factories.messages import (
    BOT_NUMBER,
    BOT_UUID,
    make_chat_message,
    make_command_message,
    make_mention,
    reactions,
    replies,
)
from tests.factories.users import ADMIN_UUID, make_stored_user

__all__ = [
    "ADMIN_UUID",
    "BOT_NUMBER",
    "BOT_UUID",
    "make_arg_spec",
    "make_chat_message",
    "make_command",
    "make_command_context",
    "make_command_message",
    "make_descriptor",
    "make_mention",
    "make_stored_user",
    "reactions",
    "replies",
]
