"""Two-outcome provider fetch result."""

from __future__ import annotations

from dataclasses import dataclass

from reposync.contracts.exceptions import FetchError
from reposync.contracts.repository import RepositoryMetadata


@dataclass(frozen=True)
class FetchResult:
    """Either the fetched metadata or the error that prevented it."""

    metadata: RepositoryMetadata | None = None
    error: FetchError | None = None

    def __post_init__(self) -> None:
        if (self.metadata is None) == (self.error is None):
            raise ValueError("FetchResult requires exactly one of metadata or error")

    @property
    def ok(self) -> bool:
        return self.metadata is not None

    @classmethod
    def success(cls, metadata: RepositoryMetadata) -> FetchResult:
        return cls(metadata=metadata)

    @classmethod
    def failure(cls, error: FetchError) -> FetchResult:
        return cls(error=error)

    def as_map(self) -> dict[str, RepositoryMetadata]:
        if self.metadata is None:
            return {}
        return {self.metadata.key: self.metadata}
