"""General module - help, diagnostics and version commands."""

from datetime import datetime, timezone
from typing import Optional

from infrastructure.commands import CommandRegistry
from infrastructure.configuration import Settings
from modules.general import commands as general_commands


def register(
    commands: CommandRegistry,
    settings: Settings,
    started_at: Optional[datetime] = None,
) -> None:
    """Register general module commands."""
    general_commands.register_commands(
        commands, settings, started_at or datetime.now(timezone.utc)
    )
