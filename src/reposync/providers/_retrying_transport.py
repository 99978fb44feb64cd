"""httpx async transport wrapper that retries transient failures."""

from __future__ import annotations

import asyncio
import logging
import random

import httpx

_LOG = logging.getLogger(__name__)

# Status codes considered transient and eligible for automatic retry.
_RETRYABLE_STATUS_CODES = frozenset({429, 502, 503, 504})
_MAX_RETRY_AFTER = 30.0


class RetryingTransport(httpx.AsyncBaseTransport):
    """Retries 429/502/503/504 responses and transport errors with backoff.

    ``Retry-After`` is honoured (capped) when the server sends it. Timeouts
    are not retried: the caller's per-fetch deadline owns them.
    """

    def __init__(
        self,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        max_retries: int = 2,
    ) -> None:
        self._transport = transport or httpx.AsyncHTTPTransport()
        self._max_retries = max_retries

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        attempt = 0
        while True:
            try:
                response = await self._transport.handle_async_request(request)
            except httpx.TimeoutException:
                raise
            except httpx.TransportError:
                if attempt >= self._max_retries:
                    raise
                await self._sleep_before_retry(request, attempt, delay=None)
                attempt += 1
                continue

            if response.status_code not in _RETRYABLE_STATUS_CODES or attempt >= self._max_retries:
                return response

            delay = self._parse_retry_after(response)
            await response.aclose()
            await self._sleep_before_retry(request, attempt, delay=delay)
            attempt += 1

    async def aclose(self) -> None:
        await self._transport.aclose()

    @staticmethod
    def _parse_retry_after(response: httpx.Response) -> float | None:
        raw = response.headers.get("Retry-After")
        if raw is None:
            return None
        try:
            return min(_MAX_RETRY_AFTER, max(0.0, float(raw)))
        except ValueError:
            return None

    @staticmethod
    async def _sleep_before_retry(request: httpx.Request, attempt: int, *, delay: float | None) -> None:
        if delay is None:
            delay = min(4.0, float(2**attempt)) + random.uniform(0.0, 0.25)
        _LOG.warning("Retrying %s %s (attempt %d) in %.2fs", request.method, request.url.host, attempt + 2, delay)
        await asyncio.sleep(delay)


def create_http_client(*, timeout: float, max_retries: int) -> httpx.AsyncClient:
    """Shared client used by every provider of one run."""
    return httpx.AsyncClient(
        transport=RetryingTransport(max_retries=max_retries),
        timeout=httpx.Timeout(timeout),
        follow_redirects=True,
        headers={"User-Agent": "reposync"},
    )
