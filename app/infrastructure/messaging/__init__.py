"""Chat transport collaborator.

Message and mention models consumed by the command core, plus the
signal-cli REST transport that produces them.
"""

from infrastructure.messaging.models import ChatMessage, Mention, MessageChannel

__all__ = ["ChatMessage", "Mention", "MessageChannel"]
