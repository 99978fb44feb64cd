"""SDK composition root for reposync."""

from __future__ import annotations

from collections.abc import Sequence
from types import TracebackType

import httpx

from reposync.auth import CredentialStore, create_credential_store
from reposync.contracts.config import RepoSyncConfig
from reposync.contracts.notify import CacheInvalidator, Messenger, NotificationSink
from reposync.contracts.store import OwnerDirectory, RepositoryStore
from reposync.contracts.sync import BatchResult, ReconcileResult
from reposync.engine import BatchDriver, QueueWorker, ReconcileProgress, Reconciler
from reposync.notify import LoggingCacheInvalidator, LoggingMessenger, MessengerNotificationSink
from reposync.providers import ProviderRegistry, create_http_client
from reposync.storage import JsonOwnerDirectory, JsonRepositoryStore
from reposync.validation import UniquenessChecker, UrlValidator


class RepoSync:
    """reposync SDK public API."""

    def __init__(
        self,
        *,
        config: RepoSyncConfig,
        registry: ProviderRegistry,
        store: RepositoryStore,
        directory: OwnerDirectory,
        sink: NotificationSink,
        cache_invalidator: CacheInvalidator | None = None,
        progress: ReconcileProgress | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._registry = registry
        self._store = store
        self._directory = directory
        self._http_client = http_client
        self._validator = UrlValidator(registry, UniquenessChecker(store))
        self._driver = BatchDriver(
            Reconciler(store, directory, max_concurrent=config.max_concurrent),
            registry,
            directory,
            store,
            sink=sink,
            cache_invalidator=cache_invalidator or LoggingCacheInvalidator(),
            cache_tag=config.cache_tag,
            dry_run=config.dry_run,
            max_concurrent=config.max_concurrent,
            progress=progress,
        )

    @classmethod
    def from_config(
        cls,
        config: RepoSyncConfig,
        *,
        messenger: Messenger | None = None,
        credentials: CredentialStore | None = None,
        http_client: httpx.AsyncClient | None = None,
        progress: ReconcileProgress | None = None,
        cache_invalidator: CacheInvalidator | None = None,
    ) -> RepoSync:
        messenger = messenger or LoggingMessenger()
        credential_store = credentials or create_credential_store(config)
        store = JsonRepositoryStore.open(config.store_path)
        client = http_client or create_http_client(timeout=config.request_timeout, max_retries=config.max_retries)
        registry = ProviderRegistry(
            config.providers,
            http_client=client,
            credentials=credential_store,
            messenger=messenger,
            timeout=config.request_timeout,
            github_api_url=config.github_api_url,
            gitlab_api_url=config.gitlab_api_url,
        )
        return cls(
            config=config,
            registry=registry,
            store=store,
            directory=JsonOwnerDirectory(config.declarations_path),
            sink=MessengerNotificationSink(messenger),
            cache_invalidator=cache_invalidator,
            progress=progress,
            http_client=client if http_client is None else None,
        )

    async def __aenter__(self) -> RepoSync:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    @property
    def queue_worker(self) -> QueueWorker:
        return QueueWorker(self._driver)

    def enabled_providers(self) -> list[str]:
        return self._registry.list_enabled()

    def validate_help_text(self) -> str:
        return self._validator.validate_help_text()

    async def validate_urls(self, urls: Sequence[str], owner_id: str) -> str:
        return await self._validator.validate_urls(urls, owner_id)

    async def has_owner(self, owner_id: str) -> bool:
        return await self._directory.has_owner(owner_id)

    async def has_records(self, owner_id: str) -> bool:
        """True when *owner_id* still holds stored records, declared or not."""
        return owner_id in await self._store.owner_ids()

    async def submit_urls(self, owner_id: str, urls: Sequence[str]) -> ReconcileResult:
        """Validate, store and immediately reconcile an owner's new URL list.

        Raises:
            UrlValidationError: If any URL is rejected; nothing is stored then.
        """
        await self._validator.validate_or_raise(urls, owner_id)
        await self._directory.declare(owner_id, [url.strip() for url in urls if url.strip()])
        return await self._driver.reconcile_one(owner_id)

    async def reconcile_one(self, owner_id: str, *, dry_run: bool | None = None) -> ReconcileResult:
        return await self._driver.reconcile_one(owner_id, dry_run=dry_run)

    async def reconcile_all(self, *, dry_run: bool | None = None) -> BatchResult:
        return await self._driver.reconcile_all(dry_run=dry_run)

    def invalidate_cache(self) -> None:
        self._driver.invalidate_cache()
