"""Registry of provider classes and the enabled-provider resolver.

Decouples provider selection from provider implementation: callers name
providers by id (as stored in configuration) and never import concrete
classes.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from reposync.contracts.exceptions import UnknownProviderError
from reposync.contracts.provider import Provider

# Registry mapping provider ids to their classes
_REGISTRY: dict[str, type[Provider]] = {}


def register(provider_id: str, provider_cls: type[Provider]) -> None:
    """Register a provider class by id.

    Args:
        provider_id: Identifier used in configuration (e.g. "github").
        provider_cls: Class implementing the Provider ABC.
    """
    _REGISTRY[provider_id] = provider_cls


def registered_ids() -> tuple[str, ...]:
    return tuple(sorted(_REGISTRY))


class ProviderRegistry:
    """Ordered set of enabled providers for one run.

    Every created provider receives the same keyword arguments (shared HTTP
    client, credential store, messenger, timeout, API base URLs).
    """

    def __init__(self, enabled_ids: Iterable[str], **provider_kwargs: Any) -> None:
        self._enabled_ids = tuple(enabled_ids)
        self._provider_kwargs = provider_kwargs

    def list_enabled(self) -> list[str]:
        """Enabled ids in configured order, blanks skipped and duplicates dropped."""
        seen: set[str] = set()
        enabled: list[str] = []
        for provider_id in self._enabled_ids:
            provider_id = (provider_id or "").strip()
            if not provider_id or provider_id in seen:
                continue
            seen.add(provider_id)
            enabled.append(provider_id)
        return enabled

    def create(self, provider_id: str) -> Provider:
        """Instantiate the provider registered as *provider_id*.

        Raises:
            UnknownProviderError: If no provider is registered under that id.
        """
        provider_cls = _REGISTRY.get(provider_id)
        if provider_cls is None:
            raise UnknownProviderError(provider_id, available=registered_ids())
        return provider_cls(**self._provider_kwargs)

    def create_enabled(self) -> list[Provider]:
        return [self.create(provider_id) for provider_id in self.list_enabled()]
