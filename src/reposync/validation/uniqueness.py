"""Cross-owner uniqueness check for repository URLs."""

from __future__ import annotations

from collections.abc import Mapping

from reposync.contracts.repository import RepositoryMetadata
from reposync.contracts.store import RepositoryStore


class UniquenessChecker:
    def __init__(self, store: RepositoryStore) -> None:
        self._store = store

    async def is_unique(self, metadata: RepositoryMetadata | Mapping[str, RepositoryMetadata], owner_id: str) -> bool:
        """True iff no other owner already holds a record with the same canonical URL."""
        if isinstance(metadata, Mapping):
            if not metadata:
                return True
            metadata = list(metadata.values())[-1]
        conflicts = await self._store.find_by_url_excluding_owner(metadata.url, owner_id)
        return not conflicts
