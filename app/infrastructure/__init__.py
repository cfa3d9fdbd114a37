"""Infrastructure modules for the Aquarius bot.

Centralized infrastructure components:
- configuration: Settings management (Settings and its subsettings)
- logging: Structured logging setup and message-scoped context
- users: Persistent user store (StoredUser, Team, UserStore)
- messaging: Chat message models and the Signal transport
- commands: Command framework (argument parsing, registry, pipeline)
- services: Application-scoped providers (get_settings, get_user_store)
"""
