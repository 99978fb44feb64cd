"""Credential store interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Credential:
    token: str
    username: str | None = None


class CredentialStore(ABC):
    @abstractmethod
    async def get_credential(self, provider_id: str) -> Credential:
        """Resolve the credential for *provider_id* or raise ``AuthenticationError``."""
