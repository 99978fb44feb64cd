"""Credential store factory."""

from __future__ import annotations

from reposync.auth.base import Credential, CredentialStore
from reposync.auth.resolvers.env import EnvCredentialStore
from reposync.auth.resolvers.static import StaticCredentialStore
from reposync.contracts.config import RepoSyncConfig
from reposync.contracts.exceptions import ConfigError

STORES: dict[str, type[CredentialStore]] = {
    "env": EnvCredentialStore,
    "token": StaticCredentialStore,
}


def create_credential_store(config: RepoSyncConfig) -> CredentialStore:
    auth_mode = config.auth
    if auth_mode not in STORES:
        raise ConfigError(f"Unknown auth mode: {auth_mode}")

    if auth_mode == "env":
        return EnvCredentialStore()
    return StaticCredentialStore(
        credentials={
            provider_id: Credential(token=entry.token, username=entry.username)
            for provider_id, entry in config.credentials.items()
        }
    )
