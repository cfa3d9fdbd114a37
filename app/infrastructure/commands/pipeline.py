"""Command execution pipeline.

Each inbound message goes through:
    Extract -> Lookup -> AuthorizeTrust -> AuthorizePolicy -> Dispatch

Rejections are signalled with a reaction on the message. Every exception
raised past Lookup is logged and reported to the caller; nothing propagates
to the transport.
"""

from typing import List, Optional, Tuple

import requests

from infrastructure.commands.context import CommandContext
from infrastructure.commands.models import Command, Reaction
from infrastructure.commands.registry import CommandRegistry
from infrastructure.logging import bind_message_context, get_module_logger
from infrastructure.messaging.models import ChatMessage
from infrastructure.users import UserStore

logger = get_module_logger()


def extract_command(text: str) -> Optional[Tuple[str, List[str]]]:
    """Split a message body into a command name and raw arguments.

    The first character of the trimmed body is the trigger (the bot mention
    placeholder) and is dropped.

    Returns:
        (lower-cased name, args), or None for an empty body
    """
    body = (text or "").strip()
    tokens = body[1:].split()
    if not tokens:
        return None
    return tokens[0].lower(), tokens[1:]


class CommandPipeline:
    """Routes inbound messages to registered commands.

    Args:
        commands: Command registry
        users: User store consulted for trust and policy decisions
    """

    def __init__(self, commands: CommandRegistry, users: UserStore):
        self.commands = commands
        self.users = users

    async def execute(self, message: ChatMessage) -> None:
        """Handle one inbound message. Never raises."""
        extracted = extract_command(message.text)
        if extracted is None:
            return
        name, args = extracted

        with bind_message_context(
            correlation_id=str(message.timestamp) if message.timestamp else None,
            sender_id=message.sender_id,
            command=name,
        ):
            try:
                await self._dispatch(message, name, args)
            except Exception as e:  # pylint: disable=broad-except
                self._log_failure(e)
                await self._report_failure(message, e)

    async def _dispatch(self, message: ChatMessage, name: str, args: List[str]) -> None:
        command = self.commands.get_command(name)
        if command is None:
            logger.info("command_not_found", command=name)
            await message.react(Reaction.UNKNOWN.value)
            return

        ctx = CommandContext(
            msg=message,
            command=command,
            args=args,
            caller_id=message.sender_id,
            users=self.users,
            user=self.users.get_user(message.sender_id),
        )

        if command.registered:
            if not self.users.is_loaded() or not self.users.is_trusted(ctx.caller_id):
                logger.info("command_rejected", command=command.name, reason="untrusted")
                await ctx.react(Reaction.REJECTED)
                return
            if not await self._authorize(command, ctx):
                logger.info("command_rejected", command=command.name, reason="policy")
                await ctx.react(Reaction.REJECTED)
                return

        logger.info("command_dispatched", command=command.name, args=args)
        await command.handler(ctx)
        logger.debug("command_completed", command=command.name)

    async def _authorize(self, command: Command, ctx: CommandContext) -> bool:
        if not self.users.is_loaded():
            return False
        if command.policy is None:
            return True
        return bool(await command.policy(ctx))

    @staticmethod
    def _log_failure(error: Exception) -> None:
        if isinstance(error, requests.HTTPError) and error.response is not None:
            logger.exception(
                "command_failed",
                error=str(error),
                status_code=error.response.status_code,
                response_body=error.response.text,
            )
        else:
            logger.exception("command_failed", error=str(error))

    @staticmethod
    async def _report_failure(message: ChatMessage, error: Exception) -> None:
        detail = str(error) or type(error).__name__
        try:
            await message.react(Reaction.FAILURE.value)
            await message.reply(f"Failed to execute command: {detail}")
        except Exception as e:  # pylint: disable=broad-except
            logger.exception("command_failure_report_failed", error=str(e))
