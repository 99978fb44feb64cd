"""Per-owner progress events emitted by the batch driver.

The CLI renders them as a live bar; library callers usually pass nothing and
get the null implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class ReconcileProgress(ABC):
    @abstractmethod
    def phase_start(self, phase: str, total: int | None = None) -> None:
        """Called once before any owner is visited; *total* is the owner count."""
        ...  # pragma: no cover

    @abstractmethod
    def item_done(self, phase: str, *, owner_id: str | None = None, failed: bool = False) -> None:
        """Called after each owner finishes.

        *failed* is true when the owner raised or finished with storage errors.
        """
        ...  # pragma: no cover

    @abstractmethod
    def phase_done(self, phase: str) -> None: ...  # pragma: no cover

    @abstractmethod
    def phase_error(self, phase: str, error: BaseException) -> None: ...  # pragma: no cover


class NullReconcileProgress(ReconcileProgress):
    def phase_start(self, phase: str, total: int | None = None) -> None:
        pass

    def item_done(self, phase: str, *, owner_id: str | None = None, failed: bool = False) -> None:
        pass

    def phase_done(self, phase: str) -> None:
        pass

    def phase_error(self, phase: str, error: BaseException) -> None:
        pass
