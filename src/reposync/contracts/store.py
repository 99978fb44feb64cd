"""Persistence collaborator contracts."""

from __future__ import annotations

from abc import ABC, abstractmethod

from reposync.contracts.repository import PersistedRepositoryRecord, UserRepositoryDeclaration


class RepositoryStore(ABC):
    """Storage for persisted repository records.

    Implementations must serialize concurrent writes to the same record and
    raise :class:`~reposync.contracts.exceptions.StorageError` on failure.
    """

    @abstractmethod
    async def find_by_owner_and_key(
        self, owner_id: str, key: str, source_provider_id: str
    ) -> PersistedRepositoryRecord | None: ...  # pragma: no cover

    @abstractmethod
    async def find_all_by_owner(self, owner_id: str) -> list[PersistedRepositoryRecord]: ...  # pragma: no cover

    @abstractmethod
    async def create(self, record: PersistedRepositoryRecord) -> PersistedRepositoryRecord:
        """Persist a new record and return it with ``record_id`` assigned."""

    @abstractmethod
    async def update(self, record: PersistedRepositoryRecord) -> PersistedRepositoryRecord: ...  # pragma: no cover

    @abstractmethod
    async def delete(self, record: PersistedRepositoryRecord) -> None: ...  # pragma: no cover

    @abstractmethod
    async def find_by_url_excluding_owner(
        self, url: str, owner_id: str
    ) -> list[PersistedRepositoryRecord]: ...  # pragma: no cover

    @abstractmethod
    async def owner_ids(self) -> list[str]:
        """Owners that currently hold at least one record."""


class OwnerDirectory(ABC):
    """Source of owners and the repository URLs they declared."""

    @abstractmethod
    async def list_owners(self) -> list[str]:
        """Owners with at least one declared URL, in a stable order."""

    @abstractmethod
    async def declared_urls(self, owner_id: str) -> list[str]: ...  # pragma: no cover

    async def declaration(self, owner_id: str) -> UserRepositoryDeclaration:
        """The owner's declared URLs, in declaration order, as one document."""
        return UserRepositoryDeclaration(owner_id=owner_id, urls=await self.declared_urls(owner_id))

    @abstractmethod
    async def has_owner(self, owner_id: str) -> bool: ...  # pragma: no cover

    @abstractmethod
    async def declare(self, owner_id: str, urls: list[str]) -> None:
        """Replace the declared URLs of *owner_id* (creating the owner if needed)."""
