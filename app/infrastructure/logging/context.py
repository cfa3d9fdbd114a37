"""Per-message logging context.

Every log line emitted while one inbound message is processed carries the
message's correlation id, sender and command.
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_message_context(
    correlation_id: Optional[str] = None,
    sender_id: Optional[str] = None,
    command: Optional[str] = None,
    **extra_context: Any,
) -> Generator[None, None, None]:
    """Bind message context to structlog context vars for the enclosed block.

    Args:
        correlation_id: Invocation id, a random uuid4 when not given
        sender_id: Stable id of the sender
        command: Command name as typed
        **extra_context: Additional key/value pairs
    """
    context: dict[str, Any] = {"correlation_id": correlation_id or str(uuid.uuid4())}
    if sender_id is not None:
        context["sender_id"] = sender_id
    if command is not None:
        context["command"] = command
    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())
