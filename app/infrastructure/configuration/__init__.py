"""Infrastructure configuration module - public API.

This module provides centralized configuration management for the bot
using Pydantic BaseSettings with domain-based organization.

Exports:
    Settings: Main settings class (for testing/overrides)

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    # Access settings
    api_url = settings.signal.SIGNAL_CLI_API
    admin = settings.users.ADMIN_UUID

    # Check environment
    if settings.is_production:
        # Production-specific logic...
    ```
"""

from infrastructure.configuration.settings import Settings

__all__ = ["Settings"]
