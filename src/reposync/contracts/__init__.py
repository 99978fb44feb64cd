"""Public contracts for reposync."""

from reposync.contracts.config import CredentialConfig, RepoSyncConfig
from reposync.contracts.exceptions import (
    AuthenticationError,
    ConfigError,
    FetchError,
    NoProvidersEnabledError,
    RepoSyncError,
    StorageError,
    UnknownOwnerError,
    UnknownProviderError,
    UrlValidationError,
)
from reposync.contracts.fetch import FetchResult
from reposync.contracts.notify import CacheInvalidator, Messenger, NotificationSink
from reposync.contracts.provider import Provider
from reposync.contracts.repository import PersistedRepositoryRecord, RepositoryMetadata, UserRepositoryDeclaration
from reposync.contracts.store import OwnerDirectory, RepositoryStore
from reposync.contracts.sync import BatchResult, ChangeAction, ChangeEvent, PlannedChange, ReconcileResult

__all__ = [
    "AuthenticationError",
    "BatchResult",
    "CacheInvalidator",
    "ChangeAction",
    "ChangeEvent",
    "ConfigError",
    "CredentialConfig",
    "FetchError",
    "FetchResult",
    "Messenger",
    "NoProvidersEnabledError",
    "NotificationSink",
    "OwnerDirectory",
    "PersistedRepositoryRecord",
    "PlannedChange",
    "Provider",
    "ReconcileResult",
    "RepoSyncConfig",
    "RepoSyncError",
    "RepositoryMetadata",
    "RepositoryStore",
    "StorageError",
    "UnknownOwnerError",
    "UnknownProviderError",
    "UrlValidationError",
    "UserRepositoryDeclaration",
]
