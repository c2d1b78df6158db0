"""
Models for the npm-trends proxy responses exposed by the MCP tools
"""

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class GitHubStats(BaseModel):
    """Repository statistics as returned by the proxy"""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str
    stars_count: int = Field(alias="starsCount")
    forks_count: Optional[int] = Field(None, alias="forksCount")
    issues_count: Optional[int] = Field(None, alias="issuesCount")
    open_issues_count: int = Field(alias="openIssuesCount")


class NpmPackageInfo(BaseModel):
    """Simplified NPM package info for tool output"""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str = ""
    latest_version: str = Field(alias="latestVersion")
    created: str
    modified: str
    repository_url: Optional[str] = Field(None, alias="repositoryUrl")
    homepage: Optional[str] = None

    @classmethod
    def from_registry(cls, data: dict) -> "NpmPackageInfo":
        """Reshape a raw registry document"""
        time_info = data.get("time") or {}
        repository = data.get("repository") or {}
        if isinstance(repository, str):
            repository = {"url": repository}
        return cls(
            name=data["name"],
            description=data.get("description") or "",
            latest_version=(data.get("dist-tags") or {})["latest"],
            created=time_info["created"],
            modified=time_info["modified"],
            repository_url=repository.get("url"),
            homepage=data.get("homepage"),
        )
