"""GitLab REST provider."""

from __future__ import annotations

import re
from urllib.parse import quote

from reposync.contracts.repository import RepositoryMetadata
from reposync.providers.base import BaseProvider


class GitLabProvider(BaseProvider):
    provider_id = "gitlab"
    label = "Gitlab"
    url_pattern = re.compile(r"^(https://)gitlab\.com/[a-zA-Z0-9_-]+/[a-zA-Z0-9_-]+")
    help_text = "https://gitlab.com/vendor/name"

    def __init__(self, *, gitlab_api_url: str = "https://gitlab.com/api/v4", **kwargs: object) -> None:
        super().__init__(**kwargs)  # type: ignore[arg-type]
        self._api_url = gitlab_api_url.rstrip("/")

    async def _fetch_metadata(self, url: str) -> RepositoryMetadata:
        owner, name = self._owner_and_name(url)
        credential = await self._credential()

        project_path = quote(f"{owner}/{name}", safe="")
        project = await self._get_json(
            url,
            f"{self._api_url}/projects/{project_path}",
            headers={"PRIVATE-TOKEN": credential.token},
        )
        # GitLab answers some unknown paths with an empty body instead of 404.
        if not project or not isinstance(project, dict):
            raise self._error(f"repository not found at {url}", "not_found", url)

        return self._map_to_common_format(
            project.get("path_with_namespace") or f"{owner}/{name}",
            project.get("name") or name,
            project.get("description"),
            project.get("open_issues_count"),
            project.get("web_url") or url,
        )
