"""Command execution contexts."""

from dataclasses import dataclass, field, replace
from typing import Any, List, Optional, Sequence, Tuple

from infrastructure.commands.mentions import substitute_mentions
from infrastructure.commands.models import Command, Reaction
from infrastructure.messaging.models import ChatMessage
from infrastructure.users import StoredUser, UserStore


@dataclass(frozen=True)
class ParserContext:
    """Per-argument-slot context handed to an argument parser.

    Attributes:
        raw: Raw token being parsed ("" for a missing optional slot)
        index: Position of the token in the raw argument list
        tokens: Full raw argument list
        message: Originating message (mentions, sender)
        users: User store for identity lookups
        caller_id: Identity of the invoking user
    """

    raw: str
    index: int
    tokens: Tuple[str, ...]
    message: ChatMessage
    users: UserStore
    caller_id: str


@dataclass
class CommandContext:
    """Per-invocation command execution context.

    Attributes:
        msg: The inbound message
        command: The resolved command
        args: Raw argument tokens (everything after the command name)
        caller_id: Identity of the invoking user
        users: User store
        user: Stored record of the caller, if registered
        parsed_args: Typed argument tuple, set for typed commands only

    Example:
        async def handler(ctx: CommandContext):
            amount, user = ctx.parsed_args
            await ctx.reply(f"{user.name} gets {amount}")
            await ctx.react(Reaction.SUCCESS)
    """

    msg: ChatMessage
    command: Command
    args: List[str]
    caller_id: str
    users: UserStore
    user: Optional[StoredUser] = None
    parsed_args: Tuple[Any, ...] = field(default_factory=tuple)

    async def reply(self, text: str) -> None:
        """Send a reply to the conversation the command came from."""
        await self.msg.reply(text)

    async def react(self, emoji: str) -> None:
        """React to the invoking message."""
        if isinstance(emoji, Reaction):
            emoji = emoji.value
        await self.msg.react(emoji)

    def parser_context(self, raw: str, index: int, tokens: Sequence[str]) -> ParserContext:
        """Build the parser context for one argument slot."""
        return ParserContext(
            raw=raw,
            index=index,
            tokens=tuple(tokens),
            message=self.msg,
            users=self.users,
            caller_id=self.caller_id,
        )

    def with_parsed_args(self, parsed_args: Tuple[Any, ...]) -> "CommandContext":
        """Copy of this context carrying the typed argument tuple."""
        return replace(self, parsed_args=tuple(parsed_args))

    def expanded_args(self) -> List[str]:
        """Raw arguments with every mention replaced by a literal identifier.

        Mentioned users with a linked external id are substituted by that
        id, everyone else by their uuid.
        """

        def _resolve(uuid: str) -> str:
            user = self.users.get_user(uuid)
            if user is not None and user.linked_id is not None:
                return str(user.linked_id)
            return uuid

        tokens = substitute_mentions(self.msg.text, self.msg.mentions, _resolve)
        return tokens[1:]
