"""Provider adapter contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from reposync.contracts.fetch import FetchResult
from reposync.contracts.repository import RepositoryMetadata


class Provider(ABC):
    provider_id: ClassVar[str]
    label: ClassVar[str]

    @abstractmethod
    def validate(self, url: str) -> bool:
        """Return whether *url* belongs to this provider. Pattern based, no I/O."""

    @abstractmethod
    def validate_help_text(self) -> str: ...  # pragma: no cover

    @abstractmethod
    async def fetch(self, url: str) -> FetchResult: ...  # pragma: no cover

    @abstractmethod
    async def get_repo(self, url: str) -> dict[str, RepositoryMetadata]:
        """Fetch metadata for *url* keyed by repository key, or ``{}`` on any failure."""
