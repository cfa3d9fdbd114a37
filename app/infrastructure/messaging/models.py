"""Transport-agnostic chat message models."""

from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from infrastructure.logging import get_module_logger

logger = get_module_logger()


class MessageChannel(Protocol):
    """Protocol for transport-specific output bound to one inbound message."""

    async def reply(self, text: str) -> None:
        """Send a text reply to the conversation the message came from."""
        ...  # pylint: disable=unnecessary-ellipsis

    async def react(self, emoji: str) -> None:
        """React to the inbound message with an emoji."""
        ...  # pylint: disable=unnecessary-ellipsis


@dataclass(frozen=True)
class Mention:
    """A mention span inside a message body.

    Attributes:
        uuid: Identity the placeholder refers to
        start: Character offset of the placeholder in the message text
        length: Length of the placeholder span
        name: Display name, if the transport supplies one
        number: Phone number, if the transport supplies one
    """

    uuid: str
    start: int
    length: int = 1
    name: str = ""
    number: str = ""


@dataclass
class ChatMessage:
    """An inbound chat message as seen by the command core.

    Attributes:
        text: Message body
        sender_id: Stable id (uuid) of the sending identity
        mentions: Mention spans in source order, including the bot's own
            self-mention at offset 0
        sender_name: Display name of the sender
        sender_number: Phone number of the sender, may be empty
        timestamp: Transport timestamp of the message
        account: Bot account that received the message
        group: Group id when the message was sent to a group
        channel: Output channel (injected by the transport)
    """

    text: str
    sender_id: str
    mentions: List[Mention] = field(default_factory=list)
    sender_name: str = ""
    sender_number: str = ""
    timestamp: int = 0
    account: str = ""
    group: Optional[str] = None
    channel: Optional[MessageChannel] = field(default=None, repr=False)

    async def reply(self, text: str) -> None:
        """Send a reply through the injected channel."""
        if self.channel is None:
            logger.warning("reply called without channel set", text=text)
            return
        await self.channel.reply(text)

    async def react(self, emoji: str) -> None:
        """React through the injected channel."""
        if self.channel is None:
            logger.warning("react called without channel set", emoji=emoji)
            return
        await self.channel.react(emoji)
