# ABOUTME: Async HTTP client for catalog API calls and artwork downloads.
# ABOUTME: Provides rate limiting, retry with backoff, and injectable transport for testing.

import asyncio
import logging
import time
from typing import Any, Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


class CatalogFetchError(Exception):
    """Raised when an HTTP request to the catalog or image host fails."""


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for the HTTP operations the catalog client needs."""

    async def get_json(
        self,
        url: str,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any: ...

    async def post_form(self, url: str, data: dict[str, str]) -> Any: ...

    async def get_bytes(self, url: str) -> bytes: ...

    async def aclose(self) -> None: ...


class CatalogHttpClient:
    """HTTP client with rate limiting and retry for catalog API calls.

    Wraps httpx.AsyncClient with a minimum request interval and retry logic
    for transient failures (429, 5xx). Requests are awaited one at a time.
    """

    def __init__(
        self,
        *,
        min_request_interval: float = 0.1,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        client_kwargs: dict[str, Any] = {
            "headers": {"User-Agent": "coverfinder/0.1.0", "Accept": "application/json"},
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.AsyncClient(**client_kwargs)
        self._min_interval = min_request_interval
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._last_request_time: float = 0.0

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_json(
        self,
        url: str,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Send a GET request and return the parsed JSON body.

        Raises:
            CatalogFetchError: On non-retryable HTTP errors, exhausted retries,
                or a body that is not valid JSON.
        """
        response = await self._send("GET", url, params=params, headers=headers)
        return self._decode_json(response, url)

    async def post_form(self, url: str, data: dict[str, str]) -> Any:
        """POST a form-encoded body and return the parsed JSON response."""
        response = await self._send("POST", url, data=data)
        return self._decode_json(response, url)

    async def get_bytes(self, url: str) -> bytes:
        """GET a URL and return the raw response body."""
        response = await self._send("GET", url)
        return response.content

    @staticmethod
    def _decode_json(response: httpx.Response, url: str) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise CatalogFetchError(f"Invalid JSON from {url}") from exc

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send a request with rate limiting and retry on transient statuses."""
        await self._rate_limit()

        attempts = 1 + self._max_retries
        last_status = 0
        for attempt in range(attempts):
            try:
                response = await self._client.request(method, url, **kwargs)
                last_status = response.status_code
            except httpx.HTTPError as exc:
                raise CatalogFetchError(f"Request failed: {url}: {exc}") from exc

            if response.status_code == 200:
                return response

            if response.status_code not in _RETRYABLE_STATUS_CODES:
                raise CatalogFetchError(f"HTTP {response.status_code} from {url}")

            if attempt < attempts - 1:
                delay = self._retry_delay * (2**attempt)
                logger.warning(
                    "HTTP %d from %s, retrying in %.1fs (attempt %d/%d)",
                    response.status_code,
                    url,
                    delay,
                    attempt + 1,
                    self._max_retries,
                )
                await asyncio.sleep(delay)

        raise CatalogFetchError(f"HTTP {last_status} from {url} after {attempts} attempts")

    async def _rate_limit(self) -> None:
        """Sleep if needed to maintain minimum interval between requests."""
        if self._min_interval <= 0:
            return
        now = time.monotonic()
        elapsed = now - self._last_request_time
        if elapsed < self._min_interval and self._last_request_time > 0:
            await asyncio.sleep(self._min_interval - elapsed)
        self._last_request_time = time.monotonic()
