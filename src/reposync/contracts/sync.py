"""Reconciliation result contracts."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from reposync.contracts.repository import PersistedRepositoryRecord


class ChangeAction(StrEnum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


class ChangeEvent(BaseModel):
    """One applied mutation of a persisted repository record."""

    record: PersistedRepositoryRecord
    action: ChangeAction


class PlannedChange(BaseModel):
    """A mutation the reconciler decided on, applied or not."""

    action: ChangeAction
    key: str
    source_provider_id: str
    url: str
    record_id: str | None = None


class ReconcileResult(BaseModel):
    owner_id: str
    events: list[ChangeEvent] = Field(default_factory=list)
    planned: list[PlannedChange] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    fetched: int = 0
    dry_run: bool = False

    @property
    def succeeded(self) -> bool:
        return not self.errors

    def count(self, action: ChangeAction) -> int:
        return sum(1 for change in self.planned if change.action == action)


class BatchResult(BaseModel):
    results: dict[str, ReconcileResult] = Field(default_factory=dict)
    failures: dict[str, str] = Field(default_factory=dict)
    dry_run: bool = False

    @property
    def succeeded(self) -> bool:
        return not self.failures and all(result.succeeded for result in self.results.values())

    def total(self, action: ChangeAction) -> int:
        return sum(result.count(action) for result in self.results.values())
