"""
Dependency injection services.

Provides provider functions for application-scoped infrastructure services.
"""

from infrastructure.services.providers import (
    get_settings,
    get_user_store,
    get_signal_client,
)

__all__ = [
    "get_settings",
    "get_user_store",
    "get_signal_client",
]
