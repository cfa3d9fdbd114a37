"""GitHub release lookups for the version and changelog commands."""

import asyncio
from typing import Optional

import requests
from pydantic import BaseModel

from infrastructure.configuration.integrations import GitHubSettings
from infrastructure.logging import get_module_logger

logger = get_module_logger()

UNKNOWN_VERSION = "unknown"


class Release(BaseModel):
    """Subset of the GitHub release payload."""

    tag_name: str = ""
    name: Optional[str] = None
    body: Optional[str] = None

    @property
    def title(self) -> str:
        return self.name or self.tag_name or "Latest Release"


def get_latest_release(settings: GitHubSettings, timeout: int = 10) -> Release:
    """Fetch the latest release of the configured repository.

    Raises:
        requests.HTTPError: On a non-2xx response
    """
    url = f"{settings.GITHUB_API_URL}/repos/{settings.REPOSITORY}/releases/latest"
    response = requests.get(
        url, headers={"Accept": "application/vnd.github.v3+json"}, timeout=timeout
    )
    response.raise_for_status()
    return Release.model_validate(response.json())


async def fetch_latest_release(settings: GitHubSettings) -> Release:
    return await asyncio.to_thread(get_latest_release, settings)


async def fetch_latest_version(settings: GitHubSettings) -> str:
    """Tag of the latest release, or "unknown" if it cannot be fetched."""
    try:
        release = await fetch_latest_release(settings)
    except (requests.RequestException, ValueError) as e:
        logger.error(
            "latest_version_fetch_failed",
            repository=settings.REPOSITORY,
            error=str(e),
        )
        return UNKNOWN_VERSION
    return release.tag_name or UNKNOWN_VERSION


def is_latest(latest: str, docker_version: str) -> bool:
    """Whether the running image tag matches the latest release tag."""
    return latest == f"v{docker_version.split(':')[0]}"
