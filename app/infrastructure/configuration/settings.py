"""Aquarius configuration settings - main aggregator."""

from pydantic_settings import BaseSettings, SettingsConfigDict

# Integration settings
from infrastructure.configuration.integrations import (
    SignalSettings,
    GitHubSettings,
)

# Feature settings
from infrastructure.configuration.features import (
    CommandsSettings,
    UsersSettings,
)


class Settings(BaseSettings):
    """Aquarius configuration settings - main aggregator.

    Aggregates all domain-specific settings into a single configuration object.
    Settings are organized by concern:

    - **Integrations**: External service configurations (Signal, GitHub)
    - **Features**: Feature module configurations (commands, users)

    Environment Variables:
        PREFIX: Environment prefix, empty in production
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        LOG_FILE: Rotated log file read by the logs command, empty to disable
        GIT_SHA: Git commit SHA for deployment tracking
        DOCKER_VERSION: Image tag the bot is running from

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        api_url = settings.signal.SIGNAL_CLI_API
        users_file = settings.users.USERS_FILE

        if settings.is_production:
            # Production-specific logic...
        ```
    """

    # Application-level settings
    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "data/app.log"
    GIT_SHA: str = "unknown"
    DOCKER_VERSION: str = "unknown"

    # Integration settings
    signal: SignalSettings
    github: GitHubSettings

    # Feature settings
    commands: CommandsSettings
    users: UsersSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production.

        Returns:
            True if PREFIX is empty (production), False otherwise.
        """
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            # Integrations
            "signal": SignalSettings,
            "github": GitHubSettings,
            # Features
            "commands": CommandsSettings,
            "users": UsersSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )
