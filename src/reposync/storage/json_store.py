"""JSON-file persistence collaborators."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from reposync.contracts.exceptions import StorageError
from reposync.contracts.repository import PersistedRepositoryRecord
from reposync.contracts.store import OwnerDirectory
from reposync.storage.memory import InMemoryRepositoryStore

_LOG = logging.getLogger(__name__)


class RepositoryStoreDocument(BaseModel):
    next_id: int = 1
    records: list[PersistedRepositoryRecord] = Field(default_factory=list)


class DeclarationsDocument(BaseModel):
    owners: dict[str, list[str]] = Field(default_factory=dict)


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise StorageError(f"invalid store file: {path}") from exc


def _write_json(path: Path, document: BaseModel) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(document.model_dump_json(indent=2), encoding="utf-8")
    except OSError as exc:
        raise StorageError(f"failed to persist store file: {path}") from exc


class JsonRepositoryStore(InMemoryRepositoryStore):
    """Repository records kept in one JSON document, rewritten on every mutation."""

    def __init__(self, path: Path, document: RepositoryStoreDocument | None = None) -> None:
        document = document or RepositoryStoreDocument()
        super().__init__(document.records, next_id=document.next_id)
        self._path = path

    @classmethod
    def open(cls, path: str | Path) -> JsonRepositoryStore:
        store_path = Path(path)
        if not store_path.exists():
            return cls(store_path)
        try:
            document = RepositoryStoreDocument.model_validate(_read_json(store_path))
        except ValidationError as exc:
            raise StorageError(f"invalid store file: {store_path}") from exc
        return cls(store_path, document)

    async def _flush(self) -> None:
        document = RepositoryStoreDocument(next_id=self._next_id, records=list(self._records.values()))
        _write_json(self._path, document)
        _LOG.debug("Wrote %d repository records to %s", len(document.records), self._path)


class JsonOwnerDirectory(OwnerDirectory):
    """Owner declarations read from a JSON file on every call.

    The file is ``{"owners": {"<owner id>": ["<url>", ...]}}``; a missing
    file means no owners.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    async def list_owners(self) -> list[str]:
        owners = self._load().owners
        return [owner_id for owner_id, urls in owners.items() if any(url.strip() for url in urls)]

    async def declared_urls(self, owner_id: str) -> list[str]:
        return list(self._load().owners.get(owner_id, []))

    async def has_owner(self, owner_id: str) -> bool:
        return owner_id in self._load().owners

    async def declare(self, owner_id: str, urls: list[str]) -> None:
        document = self._load()
        document.owners[owner_id] = list(urls)
        _write_json(self._path, document)

    def _load(self) -> DeclarationsDocument:
        if not self._path.exists():
            return DeclarationsDocument()
        try:
            return DeclarationsDocument.model_validate(_read_json(self._path))
        except ValidationError as exc:
            raise StorageError(f"invalid declarations file: {self._path}") from exc
