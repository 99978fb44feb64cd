"""Remote YAML manifest provider.

A manifest is a small YAML document served over HTTP(S)::

    acme/widget:
      label: Widget
      description: A widget
      num_open_issues: 3

The first top-level key is the repository key. No credentials are needed.
"""

from __future__ import annotations

import re
from typing import Any

import httpx
import yaml

from reposync.contracts.repository import RepositoryMetadata
from reposync.providers.base import BaseProvider


class YamlManifestProvider(BaseProvider):
    provider_id = "yml_remote"
    label = "Remote .yml file"
    url_pattern = re.compile(r"^https?://[a-zA-Z0-9.\-:]+/[a-zA-Z0-9_\-.%/]+\.ya?ml$")
    help_text = 'https://anything.anything/anything/anything.yml (or "http")'

    async def _fetch_metadata(self, url: str) -> RepositoryMetadata:
        try:
            response = await self._http.get(url)
        except httpx.TimeoutException:
            raise
        except httpx.HTTPError as exc:
            raise self._error(f"manifest unreachable: {exc}", "unreachable", url) from exc
        if response.is_error:
            raise self._error(f"manifest unreachable: HTTP {response.status_code}", "unreachable", url)

        try:
            document: Any = yaml.safe_load(response.text)
        except yaml.YAMLError as exc:
            raise self._error(f"manifest is not valid YAML: {exc}", "parse", url) from exc

        if not isinstance(document, dict) or not document:
            raise self._error("manifest must be a non-empty mapping", "parse", url)
        key, entry = next(iter(document.items()))
        if not isinstance(entry, dict) or "label" not in entry:
            raise self._error(f"manifest entry {key!r} must be a mapping with a label", "parse", url)

        return self._map_to_common_format(
            str(key),
            str(entry["label"]),
            entry.get("description"),
            entry.get("num_open_issues"),
            url,
        )
