"""Batch driver: runs the reconciler for one owner or for every owner."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections import Counter
from collections.abc import AsyncIterator

from reposync.contracts.notify import CacheInvalidator, NotificationSink
from reposync.contracts.store import OwnerDirectory, RepositoryStore
from reposync.contracts.sync import BatchResult, ReconcileResult
from reposync.engine.progress import NullReconcileProgress, ReconcileProgress
from reposync.engine.reconciler import Reconciler
from reposync.notify.cache import LoggingCacheInvalidator
from reposync.notify.sink import NullNotificationSink
from reposync.providers.registry import ProviderRegistry

_LOG = logging.getLogger(__name__)
_PHASE = "Reconcile"


class BatchDriver:
    def __init__(
        self,
        reconciler: Reconciler,
        registry: ProviderRegistry,
        directory: OwnerDirectory,
        store: RepositoryStore,
        *,
        sink: NotificationSink | None = None,
        cache_invalidator: CacheInvalidator | None = None,
        cache_tag: str = "reposync",
        dry_run: bool = False,
        max_concurrent: int = 4,
        progress: ReconcileProgress | None = None,
    ) -> None:
        self._reconciler = reconciler
        self._registry = registry
        self._directory = directory
        self._store = store
        self._sink: NotificationSink = sink or NullNotificationSink()
        self._cache_invalidator: CacheInvalidator = cache_invalidator or LoggingCacheInvalidator()
        self._cache_tag = cache_tag
        self._dry_run = dry_run
        self._max_concurrent = max_concurrent
        self._progress: ReconcileProgress = progress or NullReconcileProgress()
        self._owner_locks: dict[str, asyncio.Lock] = {}
        self._owner_lock_users: Counter[str] = Counter()

    async def reconcile_one(self, owner_id: str, *, dry_run: bool | None = None) -> ReconcileResult:
        """Reconcile a single owner and hand the resulting events to the sink.

        Raises:
            UnknownProviderError: If an enabled provider id is not registered.
        """
        effective_dry_run = self._dry_run if dry_run is None else dry_run
        # Two passes for the same owner would race on create-vs-update.
        async with self._owner_lock(owner_id):
            providers = self._registry.create_enabled()
            result = await self._reconciler.reconcile(owner_id, providers, dry_run=effective_dry_run)
        self._dispatch(result)
        return result

    async def reconcile_all(self, *, dry_run: bool | None = None) -> BatchResult:
        """Reconcile every owner independently; one owner's failure never stops the others."""
        effective_dry_run = self._dry_run if dry_run is None else dry_run
        owners = await self._owners()
        results: dict[str, ReconcileResult] = {}
        failures: dict[str, str] = {}
        semaphore = asyncio.Semaphore(self._max_concurrent)

        async def run(owner_id: str) -> None:
            async with semaphore:
                try:
                    results[owner_id] = await self.reconcile_one(owner_id, dry_run=effective_dry_run)
                except Exception as exc:
                    _LOG.exception("Reconciliation failed for owner %s", owner_id)
                    failures[owner_id] = str(exc) or type(exc).__name__
            failed = owner_id in failures or not results[owner_id].succeeded
            self._progress.item_done(_PHASE, owner_id=owner_id, failed=failed)

        self._progress.phase_start(_PHASE, total=len(owners))
        try:
            async with asyncio.TaskGroup() as tg:
                for owner_id in owners:
                    tg.create_task(run(owner_id))
        except BaseException as exc:
            self._progress.phase_error(_PHASE, exc)
            raise
        self._progress.phase_done(_PHASE)

        if not effective_dry_run:
            self.invalidate_cache()
        return BatchResult(
            results={owner_id: results[owner_id] for owner_id in owners if owner_id in results},
            failures={owner_id: failures[owner_id] for owner_id in owners if owner_id in failures},
            dry_run=effective_dry_run,
        )

    @contextlib.asynccontextmanager
    async def _owner_lock(self, owner_id: str) -> AsyncIterator[None]:
        # Entries live only while a pass for that owner is running or waiting.
        lock = self._owner_locks.setdefault(owner_id, asyncio.Lock())
        self._owner_lock_users[owner_id] += 1
        try:
            async with lock:
                yield
        finally:
            self._owner_lock_users[owner_id] -= 1
            if not self._owner_lock_users[owner_id]:
                del self._owner_lock_users[owner_id]
                del self._owner_locks[owner_id]

    def invalidate_cache(self) -> None:
        self._cache_invalidator.invalidate_tags([self._cache_tag])

    async def _owners(self) -> list[str]:
        # Owners who emptied their URL list still hold records that must go.
        declared = await self._directory.list_owners()
        holding = await self._store.owner_ids()
        return list(dict.fromkeys([*declared, *holding]))

    def _dispatch(self, result: ReconcileResult) -> None:
        for event in result.events:
            try:
                self._sink.notify(event)
            except Exception:
                _LOG.exception("Notification sink failed for %s event on %s", event.action.value, event.record.key)
