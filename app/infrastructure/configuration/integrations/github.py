"""GitHub integration settings."""

from infrastructure.configuration.base import IntegrationSettings


class GitHubSettings(IntegrationSettings):
    """GitHub releases configuration used by the version commands.

    Environment Variables:
        REPOSITORY: owner/name of the bot repository on GitHub
        GITHUB_API_URL: Base URL of the GitHub REST API
    """

    REPOSITORY: str = "gewis/aquarius"
    GITHUB_API_URL: str = "https://api.github.com"
