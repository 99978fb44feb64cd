"""Queue worker for deferred per-owner reconciliation.

Items are plain mappings ``{"owner_id": "<id>"}`` so any queue substrate can
carry them. Delivery is at-least-once: replaying an item is harmless because
an unchanged owner produces no mutations.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from reposync.contracts.store import OwnerDirectory, RepositoryStore
from reposync.contracts.sync import ReconcileResult
from reposync.engine.batch import BatchDriver

_LOG = logging.getLogger(__name__)


async def enqueue_all_owners(
    queue: asyncio.Queue[Mapping[str, Any]],
    directory: OwnerDirectory,
    store: RepositoryStore,
) -> int:
    owners = list(dict.fromkeys([*await directory.list_owners(), *await store.owner_ids()]))
    for owner_id in owners:
        await queue.put({"owner_id": owner_id})
    return len(owners)


class QueueWorker:
    def __init__(self, driver: BatchDriver) -> None:
        self._driver = driver

    async def process_item(self, data: Mapping[str, Any]) -> ReconcileResult | None:
        owner_id = data.get("owner_id")
        if owner_id is None or str(owner_id).strip() == "":
            _LOG.warning("Ignoring queue item without owner_id: %r", dict(data))
            return None
        return await self._driver.reconcile_one(str(owner_id))

    async def drain(self, queue: asyncio.Queue[Mapping[str, Any]], *, workers: int = 1) -> dict[str, str]:
        """Process items until *queue* is empty; returns failures by owner id."""
        failures: dict[str, str] = {}

        async def consume() -> None:
            while True:
                try:
                    data = queue.get_nowait()
                except asyncio.QueueEmpty:
                    return
                try:
                    await self.process_item(data)
                except Exception as exc:
                    _LOG.exception("Queue item %r failed", dict(data))
                    failures[str(data.get("owner_id"))] = str(exc) or type(exc).__name__
                finally:
                    queue.task_done()

        async with asyncio.TaskGroup() as tg:
            for _ in range(max(1, workers)):
                tg.create_task(consume())
        return failures
