"""Shared behaviour for HTTP-backed repository providers.

Concrete providers only describe their URL grammar and how one remote
payload maps to :class:`~reposync.contracts.repository.RepositoryMetadata`.
Deadline handling, error classification and failure reporting live here so
that :meth:`BaseProvider.get_repo` never lets an exception escape.
"""

from __future__ import annotations

import asyncio
import logging
import re
from abc import abstractmethod
from typing import Any, ClassVar
from urllib.parse import urlparse

import httpx
from pydantic import ValidationError

from reposync.auth.base import Credential, CredentialStore
from reposync.contracts.exceptions import AuthenticationError, FetchError, FetchErrorKind
from reposync.contracts.fetch import FetchResult
from reposync.contracts.notify import Messenger
from reposync.contracts.provider import Provider
from reposync.contracts.repository import RepositoryMetadata
from reposync.notify.messenger import LoggingMessenger

_LOG = logging.getLogger(__name__)


class BaseProvider(Provider):
    url_pattern: ClassVar[re.Pattern[str]]
    help_text: ClassVar[str]

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        credentials: CredentialStore | None = None,
        messenger: Messenger | None = None,
        timeout: float = 10.0,
        **_: object,
    ) -> None:
        self._http = http_client
        self._credentials = credentials
        self._messenger: Messenger = messenger or LoggingMessenger()
        self._timeout = timeout

    def validate(self, url: str) -> bool:
        if not isinstance(url, str):
            return False
        return self.url_pattern.match(url) is not None

    def validate_help_text(self) -> str:
        return self.help_text

    async def fetch(self, url: str) -> FetchResult:
        try:
            async with asyncio.timeout(self._timeout):
                metadata = await self._fetch_metadata(url)
        except FetchError as exc:
            exc.provider_id = exc.provider_id or self.provider_id
            exc.url = exc.url or url
            return FetchResult.failure(exc)
        except (TimeoutError, httpx.TimeoutException):
            return FetchResult.failure(self._error(f"request timed out after {self._timeout:g}s", "timeout", url))
        except httpx.HTTPError as exc:
            return FetchResult.failure(self._error(str(exc) or type(exc).__name__, "unreachable", url))
        except ValidationError as exc:
            return FetchResult.failure(self._error(f"unexpected repository payload: {exc}", "parse", url))
        return FetchResult.success(metadata)

    async def get_repo(self, url: str) -> dict[str, RepositoryMetadata]:
        result = await self.fetch(url)
        if result.error is not None:
            self._report(result.error)
            return {}
        return result.as_map()

    @abstractmethod
    async def _fetch_metadata(self, url: str) -> RepositoryMetadata:
        """Fetch and normalize *url*; raise :class:`FetchError` on failure."""

    def _report(self, error: FetchError) -> None:
        _LOG.warning("%s fetch failed (%s) for %s: %s", self.provider_id, error.kind, error.url, error.message)
        self._messenger.add_error(f"{self.label} error: {error.message}")

    def _error(self, message: str, kind: FetchErrorKind, url: str) -> FetchError:
        return FetchError(message, kind=kind, provider_id=self.provider_id, url=url)

    async def _credential(self) -> Credential:
        if self._credentials is None:
            raise AuthenticationError(f"No credential store configured for {self.label}", provider_id=self.provider_id)
        return await self._credentials.get_credential(self.provider_id)

    async def _get_json(self, url: str, api_url: str, **kwargs: Any) -> Any:
        response = await self._http.get(api_url, **kwargs)
        if response.status_code in (401, 403):
            raise AuthenticationError(
                f"{self.label} rejected the credentials (HTTP {response.status_code})",
                provider_id=self.provider_id,
                url=url,
            )
        if response.status_code == 404:
            raise self._error(f"repository not found at {url}", "not_found", url)
        if response.is_error:
            raise self._error(f"HTTP {response.status_code} from {api_url}", "http", url)
        try:
            return response.json()
        except ValueError as exc:
            raise self._error(f"invalid JSON from {api_url}", "parse", url) from exc

    def _map_to_common_format(
        self,
        key: str,
        label: str,
        description: str | None,
        num_open_issues: int | None,
        url: str,
    ) -> RepositoryMetadata:
        return RepositoryMetadata(
            key=key,
            label=label,
            description=description,
            open_issue_count=num_open_issues or 0,
            source_provider_id=self.provider_id,
            url=url,
        )

    @staticmethod
    def _owner_and_name(url: str) -> tuple[str, str]:
        parts = [part for part in urlparse(url).path.split("/") if part]
        owner, name = parts[0], parts[1]
        if name.endswith(".git"):
            name = name[: -len(".git")]
        return owner, name
