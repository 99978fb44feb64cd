"""Persistence collaborator implementations."""

from reposync.storage.json_store import JsonOwnerDirectory, JsonRepositoryStore
from reposync.storage.memory import InMemoryOwnerDirectory, InMemoryRepositoryStore

__all__ = ["InMemoryOwnerDirectory", "InMemoryRepositoryStore", "JsonOwnerDirectory", "JsonRepositoryStore"]
