"""Shared test fixtures for reposync tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from reposync.contracts.config import RepoSyncConfig
from reposync.contracts.repository import RepositoryMetadata
from reposync.storage import InMemoryOwnerDirectory, InMemoryRepositoryStore
from tests.fakes.messenger import RecordingMessenger
from tests.fakes.provider import make_metadata


@pytest.fixture
def widget() -> RepositoryMetadata:
    """The acme/widget repository as GitHub reports it."""
    return make_metadata("acme/widget", label="widget", description="A widget", open_issue_count=3)


@pytest.fixture
def store() -> InMemoryRepositoryStore:
    return InMemoryRepositoryStore()


@pytest.fixture
def directory() -> InMemoryOwnerDirectory:
    return InMemoryOwnerDirectory()


@pytest.fixture
def messenger() -> RecordingMessenger:
    return RecordingMessenger()


@pytest.fixture
def sample_config(tmp_path: Path) -> RepoSyncConfig:
    """A minimal valid RepoSyncConfig with file stores under tmp_path."""
    return RepoSyncConfig(
        providers=["github"],
        store_path=tmp_path / "repositories.json",
        declarations_path=tmp_path / "declarations.json",
        max_retries=0,
    )
