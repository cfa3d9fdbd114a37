"""Command registry for registration and discovery."""

from typing import Dict, List, Optional

from infrastructure.commands.arguments import ArgumentsRegistry
from infrastructure.commands.context import CommandContext
from infrastructure.commands.errors import ArgParseError
from infrastructure.commands.models import (
    Command,
    CommandDescriptor,
    CommandHandler,
    CommandPolicy,
    Reaction,
)
from infrastructure.commands.parser import format_usage, parse_arguments
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class CommandRegistry:
    """Registry for command registration and discovery.

    Names and aliases are case-insensitive. Registering a command under an
    existing name replaces the previous command.

    Attributes:
        arguments: Parser registry used by typed commands

    Example:
        registry = CommandRegistry(create_arguments_registry())

        async def add(ctx: CommandContext):
            a, b = ctx.parsed_args
            await ctx.reply(str(a + b))

        registry.register_typed(
            CommandDescriptor(
                name="add",
                args=(ArgSpec("a", ArgumentType.NUMBER), ArgSpec("b", ArgumentType.NUMBER)),
            ),
            add,
            policy=is_guest,
        )
    """

    def __init__(self, arguments: ArgumentsRegistry):
        self.arguments = arguments
        self._commands: Dict[str, Command] = {}
        self._aliases: Dict[str, str] = {}

    def register(self, command: Command) -> Command:
        """Register a command and its aliases.

        Aliases of a replaced command that the new command does not declare
        stop resolving.
        """
        key = command.name.lower()
        aliases = {alias.lower() for alias in command.aliases}

        previous = self._commands.pop(key, None)
        if previous is not None:
            for alias in previous.aliases:
                alias = alias.lower()
                if alias not in aliases and self._aliases.get(alias) == key:
                    del self._aliases[alias]
            logger.info("command_replaced", name=key)

        self._commands[key] = command
        for alias in aliases:
            self._aliases[alias] = key

        logger.debug("registered command", name=key, aliases=sorted(aliases))
        return command

    def register_typed(
        self,
        descriptor: CommandDescriptor,
        handler: CommandHandler,
        policy: Optional[CommandPolicy] = None,
        registered: bool = True,
    ) -> Command:
        """Register a command whose arguments are parsed before dispatch.

        The handler receives a context with parsed_args holding one value per
        declared argument. Parse failures are reported to the caller as the
        error plus a usage line, and the handler is not called.

        Raises:
            UnknownTypeError: If an argument type has no registered parser
        """
        for spec in descriptor.args:
            self.arguments.get(spec.type_name)

        arguments = self.arguments
        usage = format_usage(descriptor)

        async def typed_handler(ctx: CommandContext) -> None:
            try:
                parsed = await parse_arguments(
                    descriptor.args, ctx.args, arguments, ctx.parser_context
                )
            except ArgParseError as e:
                logger.info(
                    "command_arguments_rejected",
                    command=descriptor.name,
                    error=str(e),
                )
                await ctx.react(Reaction.FAILURE)
                await ctx.reply(f"{e}\nUsage: {usage}")
                return
            await handler(ctx.with_parsed_args(parsed))

        return self.register(
            Command(
                descriptor=descriptor,
                handler=typed_handler,
                policy=policy,
                registered=registered,
            )
        )

    def get_command(self, name: str) -> Optional[Command]:
        """Get command by canonical name or alias.

        Args:
            name: Command name or alias, any case

        Returns:
            Command object or None if not found
        """
        key = name.lower()
        command = self._commands.get(key)
        if command is not None:
            return command
        canonical = self._aliases.get(key)
        if canonical is None:
            return None
        return self._commands.get(canonical)

    def list_commands(self) -> List[Command]:
        """Get all registered commands in registration order."""
        return list(self._commands.values())
