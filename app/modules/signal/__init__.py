"""Signal module - transport administration commands."""

from infrastructure.commands import CommandRegistry
from infrastructure.messaging.signal import SignalMessageSource
from modules.signal import commands as signal_commands


def register(commands: CommandRegistry, source: SignalMessageSource) -> None:
    """Register Signal transport commands."""
    signal_commands.register_commands(commands, source)
