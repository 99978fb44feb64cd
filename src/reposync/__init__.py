"""Public API surface for reposync."""

__version__ = "1.0.0"

from reposync.auth import Credential, CredentialStore, create_credential_store
from reposync.config import load_config
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
from reposync.engine import BatchDriver, QueueWorker, ReconcileProgress, Reconciler
from reposync.providers import ProviderRegistry, create_http_client
from reposync.sdk import RepoSync
from reposync.validation import UniquenessChecker, UrlValidator

__all__ = [
    "AuthenticationError",
    "BatchDriver",
    "BatchResult",
    "CacheInvalidator",
    "ChangeAction",
    "ChangeEvent",
    "ConfigError",
    "Credential",
    "CredentialConfig",
    "CredentialStore",
    "FetchError",
    "FetchResult",
    "Messenger",
    "NoProvidersEnabledError",
    "NotificationSink",
    "OwnerDirectory",
    "PersistedRepositoryRecord",
    "PlannedChange",
    "Provider",
    "ProviderRegistry",
    "QueueWorker",
    "ReconcileProgress",
    "ReconcileResult",
    "Reconciler",
    "RepoSync",
    "RepoSyncConfig",
    "RepoSyncError",
    "RepositoryMetadata",
    "RepositoryStore",
    "StorageError",
    "UniquenessChecker",
    "UnknownOwnerError",
    "UnknownProviderError",
    "UrlValidationError",
    "UrlValidator",
    "UserRepositoryDeclaration",
    "__version__",
    "create_credential_store",
    "create_http_client",
    "load_config",
]
