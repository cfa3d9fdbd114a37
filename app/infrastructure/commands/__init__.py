"""Command framework for chat-triggered commands.

This framework provides:
- ArgumentsRegistry: Pluggable typed argument parsers
- MentionResolver: Maps mention placeholders to the users they stand for
- CommandRegistry: Register and discover commands, with aliases
- CommandPipeline: Trust, policy and dispatch for inbound messages

Example:
    from infrastructure.commands import (
        ArgSpec, ArgumentType, CommandDescriptor, CommandPipeline,
        CommandRegistry, create_arguments_registry, is_admin,
    )

    commands = CommandRegistry(create_arguments_registry())

    async def link(ctx):
        user, linked_id = ctx.parsed_args
        await ctx.users.link(user.uuid, linked_id)

    commands.register_typed(
        CommandDescriptor(
            name="link",
            args=(ArgSpec("user", ArgumentType.USER), ArgSpec("id", ArgumentType.NUMBER)),
        ),
        link,
        policy=is_admin,
    )

    pipeline = CommandPipeline(commands, users)
    await pipeline.execute(message)
"""

from infrastructure.commands.arguments import (
    ArgParser,
    ArgumentsRegistry,
    create_arguments_registry,
    register_builtin_parsers,
)
from infrastructure.commands.context import CommandContext, ParserContext
from infrastructure.commands.errors import (
    ArgParseError,
    ArgumentValueError,
    CommandError,
    ConfigurationError,
    InvalidArgumentError,
    InvalidNumberError,
    MissingArgumentError,
    UnknownTypeError,
    UserNotFoundError,
)
from infrastructure.commands.mentions import (
    MENTION_PLACEHOLDER,
    MentionResolver,
    substitute_mentions,
)
from infrastructure.commands.models import (
    ArgSpec,
    ArgumentType,
    Command,
    CommandDescriptor,
    Reaction,
)
from infrastructure.commands.parser import format_usage, parse_arguments
from infrastructure.commands.pipeline import CommandPipeline, extract_command
from infrastructure.commands.policy import (
    allow_all,
    any_of,
    is_abc,
    is_admin,
    is_cbc,
    is_guest,
    is_team,
)
from infrastructure.commands.registry import CommandRegistry

__all__ = [
    # Models
    "ArgSpec",
    "ArgumentType",
    "Command",
    "CommandDescriptor",
    "Reaction",
    # Errors
    "ArgParseError",
    "ArgumentValueError",
    "CommandError",
    "ConfigurationError",
    "InvalidArgumentError",
    "InvalidNumberError",
    "MissingArgumentError",
    "UnknownTypeError",
    "UserNotFoundError",
    # Arguments
    "ArgParser",
    "ArgumentsRegistry",
    "create_arguments_registry",
    "register_builtin_parsers",
    "parse_arguments",
    "format_usage",
    "MENTION_PLACEHOLDER",
    "MentionResolver",
    "substitute_mentions",
    # Core
    "CommandContext",
    "ParserContext",
    "CommandRegistry",
    "CommandPipeline",
    "extract_command",
    # Policies
    "allow_all",
    "any_of",
    "is_abc",
    "is_admin",
    "is_cbc",
    "is_guest",
    "is_team",
]
