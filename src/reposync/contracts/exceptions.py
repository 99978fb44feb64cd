"""Exception hierarchy for reposync."""

from __future__ import annotations

from typing import Literal

FetchErrorKind = Literal["unreachable", "parse", "auth", "not_found", "http", "timeout"]


class RepoSyncError(Exception):
    """Base exception for all reposync errors."""


class ConfigError(RepoSyncError):
    """Configuration loading or validation failure."""


class UnknownProviderError(ConfigError):
    """A provider id was requested that is not registered."""

    def __init__(self, provider_id: str, *, available: tuple[str, ...] = ()) -> None:
        listing = ", ".join(available) or "(none registered)"
        super().__init__(f"Unknown provider: {provider_id!r}. Available: {listing}")
        self.provider_id = provider_id
        self.available = available


class UrlValidationError(RepoSyncError):
    """A submitted repository URL was rejected.

    Either ``url`` is set (a single rejected URL) or ``errors`` holds several
    per-URL failures collected from one submission.
    """

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        errors: tuple[UrlValidationError, ...] = (),
    ) -> None:
        super().__init__(message)
        self.message = message
        self.url = url
        self.errors = errors

    @classmethod
    def aggregate(cls, errors: list[UrlValidationError]) -> UrlValidationError:
        return cls(" ".join(error.message for error in errors), errors=tuple(errors))


class NoProvidersEnabledError(UrlValidationError):
    """Validation was requested while no provider is enabled."""

    def __init__(self) -> None:
        super().__init__("There are no enabled repository plugins")


class FetchError(RepoSyncError):
    """A provider failed to fetch or decode remote repository metadata."""

    def __init__(
        self,
        message: str,
        *,
        kind: FetchErrorKind,
        provider_id: str | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind: FetchErrorKind = kind
        self.provider_id = provider_id
        self.url = url


class AuthenticationError(FetchError):
    """Credentials for a provider are missing or were rejected."""

    def __init__(self, message: str, *, provider_id: str | None = None, url: str | None = None) -> None:
        super().__init__(message, kind="auth", provider_id=provider_id, url=url)


class StorageError(RepoSyncError):
    """The persistence collaborator failed to read or write a record."""


class UnknownOwnerError(RepoSyncError):
    """An operation named an owner the owner directory does not know."""

    def __init__(self, owner_id: str) -> None:
        super().__init__(f"Owner does not exist: {owner_id}")
        self.owner_id = owner_id
