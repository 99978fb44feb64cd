"""Auth module public exports."""

from reposync.auth.base import Credential, CredentialStore
from reposync.auth.factory import create_credential_store

__all__ = ["Credential", "CredentialStore", "create_credential_store"]
