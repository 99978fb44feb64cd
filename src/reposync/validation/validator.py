"""Validation of repository URLs submitted by an owner."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from reposync.contracts.exceptions import NoProvidersEnabledError, UrlValidationError
from reposync.contracts.provider import Provider
from reposync.providers.registry import ProviderRegistry
from reposync.validation.uniqueness import UniquenessChecker

_LOG = logging.getLogger(__name__)


class UrlValidator:
    """Checks submitted URLs against the enabled providers.

    Per-URL problems are accumulated, never raised one by one: a submission
    gets a single message listing everything wrong with it.
    """

    def __init__(self, registry: ProviderRegistry, uniqueness: UniquenessChecker) -> None:
        self._registry = registry
        self._uniqueness = uniqueness

    def validate_help_text(self) -> str:
        return " ".join(provider.validate_help_text() for provider in self._registry.create_enabled())

    async def validate_urls(self, urls: Sequence[str], submitter_id: str) -> str:
        """Return a human-readable error summary, or ``""`` when every URL is valid."""
        try:
            errors = await self.collect_errors(urls, submitter_id)
        except NoProvidersEnabledError as exc:
            return exc.message
        return " ".join(error.message for error in errors)

    async def validate_or_raise(self, urls: Sequence[str], submitter_id: str) -> None:
        """Raise an aggregated :class:`UrlValidationError` when any URL is rejected."""
        errors = await self.collect_errors(urls, submitter_id)
        if errors:
            raise UrlValidationError.aggregate(errors)

    async def collect_errors(self, urls: Sequence[str], submitter_id: str) -> list[UrlValidationError]:
        """Structured per-URL errors.

        Raises:
            NoProvidersEnabledError: If there is nothing to validate against.
        """
        providers = self._registry.create_enabled()
        if not providers:
            raise NoProvidersEnabledError()

        errors: list[UrlValidationError] = []
        for raw in urls:
            url = (raw or "").strip()
            if not url:
                continue
            errors.extend(await self._check_url(url, providers, submitter_id))
        if errors:
            _LOG.info("Rejected %d repository URL(s) submitted by %s", len(errors), submitter_id)
        return errors

    async def _check_url(self, url: str, providers: Sequence[Provider], submitter_id: str) -> list[UrlValidationError]:
        errors: list[UrlValidationError] = []
        matched = False
        for provider in providers:
            if not provider.validate(url):
                continue
            matched = True
            metadata = await provider.get_repo(url)
            if not metadata:
                errors.append(UrlValidationError(f"The repository at the url {url} was not found.", url=url))
            elif not await self._uniqueness.is_unique(metadata, submitter_id):
                errors.append(
                    UrlValidationError(f"The repository at {url} has already been added by another user.", url=url)
                )
        if not matched:
            errors.append(UrlValidationError(f"The repository url {url} is not valid.", url=url))
        return errors
