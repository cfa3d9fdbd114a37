"""Users module - registration, trust, links and team membership."""

from infrastructure.commands import CommandRegistry
from infrastructure.users import UserStore
from modules.users import commands as user_commands


def register(commands: CommandRegistry, users: UserStore) -> None:
    """Register users module commands."""
    user_commands.register_commands(commands, users)
