"""Deterministic content hashing for repository metadata."""

from __future__ import annotations

import hashlib
import json

from reposync.contracts.repository import RepositoryMetadata


class ContentHasher:
    """Compute the change fingerprint stored alongside each record."""

    def compute(self, metadata: RepositoryMetadata) -> str:
        payload = metadata.model_dump(mode="json")
        encoded = json.dumps(payload, sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(encoded.encode("utf-8")).hexdigest()


def compute_content_hash(metadata: RepositoryMetadata) -> str:
    return ContentHasher().compute(metadata)
