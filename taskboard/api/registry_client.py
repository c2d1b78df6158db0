"""
Client for the npm-trends proxy (GitHub repository stats, NPM registry)
"""

from typing import Optional
from urllib.parse import quote
import httpx
from taskboard.api.base_client import BaseAPIClient
from taskboard.config.settings import settings
from taskboard.config.constants import GITHUB_REPOS_ENDPOINT, NPM_REGISTRY_ENDPOINT
from taskboard.models.registry import GitHubStats, NpmPackageInfo
from taskboard.utils.error_handler import NotFoundError
from taskboard.utils.logger import logger


class RegistryClient(BaseAPIClient):
    """Read-only client for the third-party stats proxy"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(
            base_url or settings.REGISTRY_PROXY_URL,
            timeout=settings.REQUEST_TIMEOUT,
            http_client=http_client,
        )
        self.logger = logger

    async def get_github_stats(self, owner: str, repo: str) -> GitHubStats:
        """
        Fetch GitHub repository statistics

        Args:
            owner: Repository owner (e.g., "angular")
            repo: Repository name (e.g., "angular-cli")

        Returns:
            Stars, forks and issue counts

        Raises:
            NotFoundError: If the repository does not exist
            APIError: If the request fails
        """
        try:
            data = await self.get(endpoint=f"{GITHUB_REPOS_ENDPOINT}/{owner}/{repo}")
        except NotFoundError:
            raise NotFoundError(f"Repository {owner}/{repo} not found")
        self.logger.debug(f"[Registry] GitHub stats for {owner}/{repo}: {data}")
        return GitHubStats.model_validate(data)

    async def get_npm_package_info(self, package_name: str) -> NpmPackageInfo:
        """
        Fetch NPM package information

        Args:
            package_name: Package name; scoped names such as "@angular/cli" are URL-encoded

        Returns:
            Latest version, description, dates and repository

        Raises:
            NotFoundError: If the package does not exist
            APIError: If the request fails
        """
        encoded = quote(package_name, safe="")
        try:
            data = await self.get(endpoint=f"{NPM_REGISTRY_ENDPOINT}/{encoded}")
        except NotFoundError:
            raise NotFoundError(f'Package "{package_name}" not found')
        return NpmPackageInfo.from_registry(data)
