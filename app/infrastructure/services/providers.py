"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core infrastructure services.
Command and argument registries are not provided here; they are
constructed explicitly at startup and passed by reference to the pipeline and
to module registration functions.
"""

from functools import lru_cache

from infrastructure.configuration import Settings
from infrastructure.messaging.signal import SignalClient
from infrastructure.users import UserStore


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    The @lru_cache decorator ensures only ONE instance is created per process,
    even if called from multiple packages.

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_user_store() -> UserStore:
    """
    Get application-scoped user store singleton.

    The store is returned unloaded; callers must await ``load()`` before the
    store grants trust or passes policies.

    Returns:
        UserStore: Cached user store backed by the configured JSON file.
    """
    settings = get_settings()
    return UserStore(
        file_path=settings.users.USERS_FILE,
        admin_uuid=settings.users.ADMIN_UUID,
    )


@lru_cache
def get_signal_client() -> SignalClient:
    """
    Get application-scoped signal-cli REST client singleton.

    Returns:
        SignalClient: Cached client configured from application settings.
    """
    settings = get_settings()
    return SignalClient(
        base_url=settings.signal.SIGNAL_CLI_API,
        timeout=settings.signal.SIGNAL_REQUEST_TIMEOUT,
    )
