"""Messaging, notification and cache-invalidation contracts."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from reposync.contracts.sync import ChangeEvent


class Messenger(ABC):
    """Human-facing status channel (CLI output, web flash messages, ...)."""

    @abstractmethod
    def add_status(self, message: str) -> None: ...  # pragma: no cover

    @abstractmethod
    def add_warning(self, message: str) -> None: ...  # pragma: no cover

    @abstractmethod
    def add_error(self, message: str) -> None: ...  # pragma: no cover


class NotificationSink(ABC):
    @abstractmethod
    def notify(self, event: ChangeEvent) -> None:
        """Receive one change event. Delivery is fire-and-forget."""


class CacheInvalidator(ABC):
    @abstractmethod
    def invalidate_tags(self, tags: Iterable[str]) -> None: ...  # pragma: no cover
