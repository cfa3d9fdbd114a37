"""Signal integration settings."""

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class SignalSettings(IntegrationSettings):
    """signal-cli REST API configuration.

    Environment Variables:
        SIGNAL_CLI_API: Base URL of the signal-cli REST API
        SIGNAL_POLL_INTERVAL: Seconds to wait between receive polls
        SIGNAL_REQUEST_TIMEOUT: Timeout in seconds for REST calls

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        api_url = settings.signal.SIGNAL_CLI_API
        ```
    """

    SIGNAL_CLI_API: str = "http://cli-rest-api:8080"
    SIGNAL_POLL_INTERVAL: float = Field(default=1.0, ge=0)
    SIGNAL_REQUEST_TIMEOUT: int = Field(default=30, gt=0)
