"""Concrete credential stores."""

from reposync.auth.resolvers.env import EnvCredentialStore
from reposync.auth.resolvers.static import StaticCredentialStore

__all__ = ["EnvCredentialStore", "StaticCredentialStore"]
