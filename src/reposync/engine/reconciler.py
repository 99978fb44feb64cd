"""Repository reconciliation engine.

One pass brings an owner's persisted repository records in line with what
the enabled providers currently report for the owner's declared URLs:

1. Fetch: every (provider, url) pair whose URL the provider accepts is
   fetched concurrently; results are merged in provider order, then URL
   order, so on a key collision the later pair wins.
2. Upsert: records are created, or updated in place when the content hash
   changed.
3. Delete: records whose (key, provider) pair was not produced are removed.

The declared URL list is the source of truth: an owner with no URLs, or whose
providers are all disabled, ends the pass with no records. A failed fetch
contributes nothing. Storage failures are recorded per record and never roll
back mutations already applied to sibling records; in apply mode a change is
only listed in ``planned`` once its write succeeded.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Sequence
from typing import TypeVar

from reposync.contracts.exceptions import StorageError
from reposync.contracts.provider import Provider
from reposync.contracts.repository import PersistedRepositoryRecord, RepositoryMetadata
from reposync.contracts.store import OwnerDirectory, RepositoryStore
from reposync.contracts.sync import ChangeAction, ChangeEvent, PlannedChange, ReconcileResult
from reposync.engine.hasher import ContentHasher

T = TypeVar("T")
_LOG = logging.getLogger(__name__)


class Reconciler:
    def __init__(
        self,
        store: RepositoryStore,
        directory: OwnerDirectory,
        *,
        hasher: ContentHasher | None = None,
        max_concurrent: int = 4,
    ) -> None:
        self._store = store
        self._directory = directory
        self._hasher = hasher or ContentHasher()
        self._semaphore = asyncio.Semaphore(max_concurrent)

    async def reconcile(
        self,
        owner_id: str,
        providers: Sequence[Provider],
        *,
        dry_run: bool = False,
    ) -> ReconcileResult:
        urls = (await self._directory.declaration(owner_id)).urls
        fresh = await self.collect(providers, urls)
        result = ReconcileResult(owner_id=owner_id, fetched=len(fresh), dry_run=dry_run)

        await self._upsert(owner_id, fresh, result)
        await self._delete(owner_id, fresh, result)

        _LOG.info(
            "Reconciled owner %s: %d created, %d updated, %d deleted%s",
            owner_id,
            result.count(ChangeAction.CREATED),
            result.count(ChangeAction.UPDATED),
            result.count(ChangeAction.DELETED),
            " (dry-run)" if dry_run else "",
        )
        return result

    async def collect(self, providers: Sequence[Provider], urls: Sequence[str]) -> dict[str, RepositoryMetadata]:
        """Fetch fresh metadata for *urls* from every accepting provider."""
        pairs = [
            (provider, url)
            for provider in providers
            for url in (raw.strip() for raw in urls)
            if url and provider.validate(url)
        ]
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(self._guarded(provider.get_repo(url))) for provider, url in pairs]

        fresh: dict[str, RepositoryMetadata] = {}
        for task in tasks:
            fresh.update(task.result())
        return fresh

    async def _upsert(self, owner_id: str, fresh: dict[str, RepositoryMetadata], result: ReconcileResult) -> None:
        for key, metadata in fresh.items():
            content_hash = self._hasher.compute(metadata)
            try:
                existing = await self._store.find_by_owner_and_key(owner_id, key, metadata.source_provider_id)
                if existing is None:
                    await self._create(owner_id, metadata, content_hash, result)
                elif existing.content_hash != content_hash:
                    await self._update(existing, metadata, content_hash, result)
            except StorageError as exc:
                self._record_storage_error(result, key, exc)

    async def _create(
        self,
        owner_id: str,
        metadata: RepositoryMetadata,
        content_hash: str,
        result: ReconcileResult,
    ) -> None:
        change = PlannedChange(
            action=ChangeAction.CREATED,
            key=metadata.key,
            source_provider_id=metadata.source_provider_id,
            url=metadata.url,
        )
        if result.dry_run:
            result.planned.append(change)
            return
        record = PersistedRepositoryRecord.from_metadata(metadata, owner_id=owner_id, content_hash=content_hash)
        created = await self._store.create(record)
        result.planned.append(change.model_copy(update={"record_id": created.record_id}))
        result.events.append(ChangeEvent(record=created, action=ChangeAction.CREATED))

    async def _update(
        self,
        existing: PersistedRepositoryRecord,
        metadata: RepositoryMetadata,
        content_hash: str,
        result: ReconcileResult,
    ) -> None:
        change = PlannedChange(
            action=ChangeAction.UPDATED,
            key=metadata.key,
            source_provider_id=metadata.source_provider_id,
            url=metadata.url,
            record_id=existing.record_id,
        )
        if result.dry_run:
            result.planned.append(change)
            return
        updated = await self._store.update(existing.apply(metadata, content_hash=content_hash))
        result.planned.append(change)
        result.events.append(ChangeEvent(record=updated, action=ChangeAction.UPDATED))

    async def _delete(self, owner_id: str, fresh: dict[str, RepositoryMetadata], result: ReconcileResult) -> None:
        produced = {(key, metadata.source_provider_id) for key, metadata in fresh.items()}
        try:
            persisted = await self._store.find_all_by_owner(owner_id)
        except StorageError as exc:
            self._record_storage_error(result, "*", exc)
            return

        for record in persisted:
            if (record.key, record.source_provider_id) in produced:
                continue
            change = PlannedChange(
                action=ChangeAction.DELETED,
                key=record.key,
                source_provider_id=record.source_provider_id,
                url=record.url,
                record_id=record.record_id,
            )
            if result.dry_run:
                result.planned.append(change)
                continue
            try:
                await self._store.delete(record)
            except StorageError as exc:
                self._record_storage_error(result, record.key, exc)
                continue
            result.planned.append(change)
            result.events.append(ChangeEvent(record=record, action=ChangeAction.DELETED))

    @staticmethod
    def _record_storage_error(result: ReconcileResult, key: str, exc: StorageError) -> None:
        _LOG.error("Storage failure for owner %s, repository %s: %s", result.owner_id, key, exc)
        result.errors.append(f"{key}: {exc}")

    async def _guarded(self, op: Awaitable[T]) -> T:
        async with self._semaphore:
            return await op
