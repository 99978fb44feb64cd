"""GitHub REST provider."""

from __future__ import annotations

import re

import httpx

from reposync.contracts.repository import RepositoryMetadata
from reposync.providers.base import BaseProvider


class GitHubProvider(BaseProvider):
    provider_id = "github"
    label = "GitHub"
    url_pattern = re.compile(r"^https://(www\.)?github\.com/[a-zA-Z0-9_-]+/[a-zA-Z0-9_-]+")
    help_text = "https://github.com/vendor/name"

    def __init__(self, *, github_api_url: str = "https://api.github.com", **kwargs: object) -> None:
        super().__init__(**kwargs)  # type: ignore[arg-type]
        self._api_url = github_api_url.rstrip("/")

    async def _fetch_metadata(self, url: str) -> RepositoryMetadata:
        owner, name = self._owner_and_name(url)
        credential = await self._credential()

        headers = {"Accept": "application/vnd.github+json", "X-GitHub-Api-Version": "2022-11-28"}
        auth: httpx.Auth | None = None
        if credential.username:
            auth = httpx.BasicAuth(credential.username, credential.token)
        else:
            headers["Authorization"] = f"Bearer {credential.token}"

        repo = await self._get_json(url, f"{self._api_url}/repos/{owner}/{name}", headers=headers, auth=auth)
        if not isinstance(repo, dict) or not repo.get("full_name"):
            raise self._error(f"repository not found at {url}", "not_found", url)

        return self._map_to_common_format(
            repo["full_name"],
            repo.get("name") or name,
            repo.get("description"),
            repo.get("open_issues_count"),
            repo.get("html_url") or url,
        )
