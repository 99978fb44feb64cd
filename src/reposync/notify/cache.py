"""Cache invalidators."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from reposync.contracts.notify import CacheInvalidator

_LOG = logging.getLogger(__name__)


class LoggingCacheInvalidator(CacheInvalidator):
    """Default invalidator for hosts without a tagged cache: records the request in the log."""

    def invalidate_tags(self, tags: Iterable[str]) -> None:
        _LOG.info("Invalidating cache tags: %s", ", ".join(tags))
