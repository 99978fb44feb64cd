"""Environment credential store."""

from __future__ import annotations

import os

from reposync.auth.base import Credential, CredentialStore
from reposync.contracts.exceptions import AuthenticationError


def _env_prefix(provider_id: str) -> str:
    return "".join(char if char.isalnum() else "_" for char in provider_id).upper()


class EnvCredentialStore(CredentialStore):
    """Reads ``<PROVIDER>_TOKEN`` and optional ``<PROVIDER>_USERNAME``."""

    async def get_credential(self, provider_id: str) -> Credential:
        prefix = _env_prefix(provider_id)
        token = (os.getenv(f"{prefix}_TOKEN") or "").strip()
        if not token:
            raise AuthenticationError(f"{prefix}_TOKEN is not set or empty", provider_id=provider_id)
        username = (os.getenv(f"{prefix}_USERNAME") or "").strip() or None
        return Credential(token=token, username=username)
