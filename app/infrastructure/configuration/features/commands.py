"""Commands feature settings."""

from typing import List

from pydantic import Field

from infrastructure.configuration.base import FeatureSettings


class CommandsSettings(FeatureSettings):
    """Configuration for command registration.

    Environment Variables:
        DISABLED_MODULES: Comma separated list of feature modules that
            should not register their commands (e.g. "general,users,signal")

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        if settings.commands.is_enabled("users"):
            users_module.register(commands, user_store)
        ```
    """

    DISABLED_MODULES: str = Field(
        default="",
        description="Feature modules whose commands are not registered",
    )

    @property
    def disabled_modules(self) -> List[str]:
        """Normalized list of disabled module names."""
        return [
            item.strip().lower()
            for item in self.DISABLED_MODULES.split(",")
            if item.strip()
        ]

    def is_enabled(self, module: str) -> bool:
        """Check whether a feature module should register its commands."""
        return module.lower() not in self.disabled_modules
