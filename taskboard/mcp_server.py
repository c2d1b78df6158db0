"""FastMCP server exposing registry lookup tools.

Tools:
- get-github-stats: stars, forks and issue counts of a GitHub repository
- get-npm-package-info: latest version, dates and links of an NPM package

Usage:
    # Development
    mcp dev taskboard/mcp_server.py

    # Production (stdio)
    python -m taskboard.mcp_server
"""

from typing import Any, Dict, Optional

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError

from taskboard.api.registry_client import RegistryClient
from taskboard.config.constants import MCP_SERVER_NAME
from taskboard.utils.error_handler import TaskBoardError
from taskboard.utils.logger import logger

mcp = FastMCP(MCP_SERVER_NAME)


async def fetch_github_stats(
    owner: str,
    repo: str,
    client: Optional[RegistryClient] = None,
) -> Dict[str, Any]:
    """Look up repository stats; returns the camelCase tool payload"""
    registry = client or RegistryClient()
    try:
        stats = await registry.get_github_stats(owner, repo)
    finally:
        if client is None:
            await registry.close()
    return stats.model_dump(by_alias=True)


async def fetch_npm_package_info(
    package_name: str,
    client: Optional[RegistryClient] = None,
) -> Dict[str, Any]:
    """Look up package info; optional fields are omitted when absent"""
    registry = client or RegistryClient()
    try:
        info = await registry.get_npm_package_info(package_name)
    finally:
        if client is None:
            await registry.close()
    return info.model_dump(by_alias=True, exclude_none=True)


@mcp.tool(
    name="get-github-stats",
    description="Fetch GitHub repository statistics including stars, forks, and issues",
)
async def get_github_stats(owner: str, repo: str) -> Dict[str, Any]:
    """
    Args:
        owner: Repository owner (e.g., "angular")
        repo: Repository name (e.g., "angular-cli")
    """
    logger.info(f"[MCP] get-github-stats {owner}/{repo}")
    try:
        return await fetch_github_stats(owner, repo)
    except TaskBoardError as e:
        logger.warning(f"[MCP] get-github-stats failed: {e}")
        raise ToolError(str(e)) from e


@mcp.tool(
    name="get-npm-package-info",
    description="Fetch NPM package information including version, description, and repository",
)
async def get_npm_package_info(packageName: str) -> Dict[str, Any]:
    """
    Args:
        packageName: NPM package name (e.g., "express", "@angular/cli")
    """
    logger.info(f"[MCP] get-npm-package-info {packageName}")
    try:
        return await fetch_npm_package_info(packageName)
    except TaskBoardError as e:
        logger.warning(f"[MCP] get-npm-package-info failed: {e}")
        raise ToolError(str(e)) from e


def main():
    mcp.run()


if __name__ == "__main__":
    main()
