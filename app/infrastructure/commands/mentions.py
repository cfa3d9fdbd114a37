"""Mention resolution.

Chat clients replace every @-mention in the message body with a single
placeholder character and send the mentioned identities out of band, keyed
by character offset. The first mention is always the bot itself (the
trigger), so the N-th placeholder among the argument tokens corresponds to
the N-th mention after the self-mention.
"""

from typing import Callable, Dict, List, Optional, Sequence

from infrastructure.commands.errors import UserNotFoundError
from infrastructure.logging import get_module_logger
from infrastructure.messaging.models import Mention
from infrastructure.users import StoredUser, UserStore

logger = get_module_logger()

MENTION_PLACEHOLDER = "￼"
_UTF16 = "utf-16-le"


class MentionResolver:
    """Maps argument token positions to the mentions they stand for.

    Args:
        tokens: Raw argument tokens
        mentions: Mentions attached to the message, in any order
    """

    def __init__(self, tokens: Sequence[str], mentions: Sequence[Mention]):
        placeholders = [
            i for i, token in enumerate(tokens) if token == MENTION_PLACEHOLDER
        ]
        ordered = sorted(mentions, key=lambda m: m.start)[1:]
        self._by_index: Dict[int, Mention] = dict(zip(placeholders, ordered))

    def mention_at(self, index: int) -> Optional[Mention]:
        """Mention aligned with the token at index, if any."""
        return self._by_index.get(index)

    def resolve_user(self, index: int, raw: str, users: UserStore) -> StoredUser:
        """Resolve the token at index to a stored user.

        A placeholder token resolves through its mention; any other token is
        looked up as a direct identifier (linked id or uuid).

        Raises:
            UserNotFoundError: If neither lookup finds a user
        """
        mention = self.mention_at(index)
        if mention is not None:
            user = users.get_user(mention.uuid)
            if user is not None:
                return user
            logger.debug("mentioned_user_not_stored", uuid=mention.uuid)

        user = users.find_user(raw)
        if user is None:
            raise UserNotFoundError(raw)
        return user


def substitute_mentions(
    text: str, mentions: Sequence[Mention], resolve_id: Callable[[str], str]
) -> List[str]:
    """Replace mention placeholders in text with literal identifiers.

    Mention offsets count UTF-16 code units, so the splice is done on the
    UTF-16 encoding of the text. Mentions are processed from the highest
    offset down so earlier offsets stay valid. A mention at offset 0 is the
    trigger and is removed.

    Returns:
        The rewritten text split on whitespace
    """
    data = text.encode(_UTF16)
    for mention in sorted(mentions, key=lambda m: m.start, reverse=True):
        start = mention.start * 2
        end = start + mention.length * 2
        replacement = "" if mention.start == 0 else resolve_id(mention.uuid)
        data = data[:start] + replacement.encode(_UTF16) + data[end:]
    return data.decode(_UTF16).split()
