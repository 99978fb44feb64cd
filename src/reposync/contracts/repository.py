"""Repository metadata and persisted record contracts."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RepositoryMetadata(BaseModel):
    """Canonical snapshot of one remote repository as reported by a provider."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(min_length=1)
    label: str
    description: str | None = None
    open_issue_count: int = Field(default=0, ge=0)
    source_provider_id: str
    url: str


class PersistedRepositoryRecord(BaseModel):
    """Locally stored counterpart of :class:`RepositoryMetadata`."""

    key: str
    label: str
    description: str | None = None
    open_issue_count: int = Field(default=0, ge=0)
    source_provider_id: str
    url: str
    owner_id: str
    content_hash: str
    record_id: str | None = None

    @classmethod
    def from_metadata(
        cls,
        metadata: RepositoryMetadata,
        *,
        owner_id: str,
        content_hash: str,
        record_id: str | None = None,
    ) -> PersistedRepositoryRecord:
        return cls(
            **metadata.model_dump(),
            owner_id=owner_id,
            content_hash=content_hash,
            record_id=record_id,
        )

    def to_metadata(self) -> RepositoryMetadata:
        return RepositoryMetadata(
            key=self.key,
            label=self.label,
            description=self.description,
            open_issue_count=self.open_issue_count,
            source_provider_id=self.source_provider_id,
            url=self.url,
        )

    def apply(self, metadata: RepositoryMetadata, *, content_hash: str) -> PersistedRepositoryRecord:
        """Return a copy carrying *metadata*'s fields and the new hash, same identity."""
        return self.model_copy(update={**metadata.model_dump(), "content_hash": content_hash})


class UserRepositoryDeclaration(BaseModel):
    """Ordered repository URLs one owner has declared."""

    owner_id: str
    urls: list[str] = Field(default_factory=list)
