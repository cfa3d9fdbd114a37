"""Feature settings __init__ - exports all feature settings."""

from infrastructure.configuration.features.commands import CommandsSettings
from infrastructure.configuration.features.users import UsersSettings

__all__ = [
    "CommandsSettings",
    "UsersSettings",
]
