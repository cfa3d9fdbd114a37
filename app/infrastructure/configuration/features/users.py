"""Users feature settings."""

from infrastructure.configuration.base import FeatureSettings


class UsersSettings(FeatureSettings):
    """Configuration for the persistent user store.

    Environment Variables:
        USERS_FILE: Path of the JSON file holding registered users
        ADMIN_UUID: Signal UUID of the bot administrator. The administrator
            is always trusted and passes every policy.
    """

    USERS_FILE: str = "/home/.local/share/aquarius/users.json"
    ADMIN_UUID: str = ""
