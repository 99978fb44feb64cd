"""Static credential store."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from reposync.auth.base import Credential, CredentialStore
from reposync.contracts.exceptions import AuthenticationError


@dataclass(frozen=True)
class StaticCredentialStore(CredentialStore):
    credentials: Mapping[str, Credential] = field(default_factory=dict)

    async def get_credential(self, provider_id: str) -> Credential:
        credential = self.credentials.get(provider_id)
        if credential is None:
            raise AuthenticationError(f"No credential configured for provider {provider_id!r}", provider_id=provider_id)
        token = credential.token.strip()
        if not token:
            raise AuthenticationError(f"Static token for provider {provider_id!r} is empty", provider_id=provider_id)
        return Credential(token=token, username=credential.username)
