"""In-memory persistence collaborators."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping

from reposync.contracts.exceptions import StorageError
from reposync.contracts.repository import PersistedRepositoryRecord
from reposync.contracts.store import OwnerDirectory, RepositoryStore


class InMemoryRepositoryStore(RepositoryStore):
    """Dict-backed store. Writes are serialized by one lock.

    Subclasses persist the state by overriding :meth:`_flush`; when it raises,
    the in-memory change is rolled back so memory never runs ahead of disk.
    """

    def __init__(self, records: Iterable[PersistedRepositoryRecord] = (), *, next_id: int = 1) -> None:
        self._records: dict[str, PersistedRepositoryRecord] = {}
        self._next_id = next_id
        self._lock = asyncio.Lock()
        for record in records:
            record_id = record.record_id or self._allocate_id()
            self._records[record_id] = record.model_copy(update={"record_id": record_id})
            if record_id.isdigit():
                self._next_id = max(self._next_id, int(record_id) + 1)

    async def find_by_owner_and_key(
        self, owner_id: str, key: str, source_provider_id: str
    ) -> PersistedRepositoryRecord | None:
        for record in self._records.values():
            if record.owner_id == owner_id and record.key == key and record.source_provider_id == source_provider_id:
                return record.model_copy()
        return None

    async def find_all_by_owner(self, owner_id: str) -> list[PersistedRepositoryRecord]:
        return [record.model_copy() for record in self._records.values() if record.owner_id == owner_id]

    async def find_by_url_excluding_owner(self, url: str, owner_id: str) -> list[PersistedRepositoryRecord]:
        return [
            record.model_copy()
            for record in self._records.values()
            if record.url == url and record.owner_id != owner_id
        ]

    async def create(self, record: PersistedRepositoryRecord) -> PersistedRepositoryRecord:
        async with self._lock:
            snapshot, next_id = dict(self._records), self._next_id
            record_id = self._allocate_id()
            created = record.model_copy(update={"record_id": record_id})
            self._records[record_id] = created
            await self._commit(snapshot, next_id)
            return created.model_copy()

    async def update(self, record: PersistedRepositoryRecord) -> PersistedRepositoryRecord:
        async with self._lock:
            if record.record_id is None or record.record_id not in self._records:
                raise StorageError(f"cannot update unknown record {record.record_id!r}")
            snapshot, next_id = dict(self._records), self._next_id
            self._records[record.record_id] = record.model_copy()
            await self._commit(snapshot, next_id)
            return record.model_copy()

    async def delete(self, record: PersistedRepositoryRecord) -> None:
        async with self._lock:
            if record.record_id is None or record.record_id not in self._records:
                raise StorageError(f"cannot delete unknown record {record.record_id!r}")
            snapshot, next_id = dict(self._records), self._next_id
            del self._records[record.record_id]
            await self._commit(snapshot, next_id)

    async def owner_ids(self) -> list[str]:
        return list(dict.fromkeys(record.owner_id for record in self._records.values()))

    def records(self) -> list[PersistedRepositoryRecord]:
        return [record.model_copy() for record in self._records.values()]

    async def _commit(self, snapshot: dict[str, PersistedRepositoryRecord], next_id: int) -> None:
        try:
            await self._flush()
        except StorageError:
            self._records, self._next_id = snapshot, next_id
            raise

    async def _flush(self) -> None:
        return None

    def _allocate_id(self) -> str:
        record_id = str(self._next_id)
        self._next_id += 1
        return record_id


class InMemoryOwnerDirectory(OwnerDirectory):
    def __init__(self, declarations: Mapping[str, list[str]] | None = None) -> None:
        self._declarations: dict[str, list[str]] = {
            owner_id: list(urls) for owner_id, urls in (declarations or {}).items()
        }

    async def list_owners(self) -> list[str]:
        return [owner_id for owner_id, urls in self._declarations.items() if any(url.strip() for url in urls)]

    async def declared_urls(self, owner_id: str) -> list[str]:
        return list(self._declarations.get(owner_id, []))

    async def has_owner(self, owner_id: str) -> bool:
        return owner_id in self._declarations

    async def declare(self, owner_id: str, urls: list[str]) -> None:
        self._declarations[owner_id] = list(urls)
