# ABOUTME: Unit tests for the async catalog HTTP client.
# ABOUTME: Tests the HttpClient protocol, retries, rate limiting, and error wrapping.

import asyncio
import time

import httpx
import pytest

from coverfinder.catalog.http import CatalogFetchError, CatalogHttpClient, HttpClient


class FakeTransport(httpx.AsyncBaseTransport):
    """Fake async transport for httpx that returns canned responses."""

    def __init__(self, responses: list[httpx.Response | Exception] | None = None) -> None:
        self._responses = list(responses or [])
        self.requests: list[httpx.Request] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._responses:
            response = self._responses.pop(0)
            if isinstance(response, Exception):
                raise response
            return response
        return httpx.Response(200, json={"ok": True})

    @property
    def call_count(self) -> int:
        return len(self.requests)


def _client(transport: FakeTransport, **kwargs: float) -> CatalogHttpClient:
    kwargs.setdefault("min_request_interval", 0.0)
    kwargs.setdefault("retry_delay", 0.0)
    return CatalogHttpClient(transport=transport, **kwargs)


class TestHttpClientProtocol:
    """Tests for HttpClient protocol compliance."""

    def test_catalog_client_satisfies_protocol(self) -> None:
        """CatalogHttpClient satisfies the HttpClient protocol."""
        client = CatalogHttpClient(min_request_interval=0.0)
        assert isinstance(client, HttpClient)


class TestCatalogHttpClient:
    """Tests for CatalogHttpClient."""

    def test_get_json_returns_parsed_body(self) -> None:
        """GET request returns parsed JSON and sends query params."""
        transport = FakeTransport()
        client = _client(transport)

        result = asyncio.run(client.get_json("https://example.com/api", params={"q": "x y"}))

        assert result == {"ok": True}
        assert transport.requests[0].url.params["q"] == "x y"

    def test_get_json_sends_headers(self) -> None:
        """Per-request headers are sent alongside the default User-Agent."""
        transport = FakeTransport()
        client = _client(transport)

        asyncio.run(
            client.get_json("https://example.com/api", headers={"Authorization": "Bearer t"})
        )

        request = transport.requests[0]
        assert request.headers["authorization"] == "Bearer t"
        assert request.headers["user-agent"].startswith("coverfinder/")

    def test_post_form_encodes_body(self) -> None:
        """POST sends a form-encoded body."""
        transport = FakeTransport([httpx.Response(200, json={"access_token": "t"})])
        client = _client(transport)

        result = asyncio.run(
            client.post_form(
                "https://example.com/token", data={"grant_type": "client_credentials"}
            )
        )

        request = transport.requests[0]
        assert result == {"access_token": "t"}
        assert request.method == "POST"
        assert request.headers["content-type"] == "application/x-www-form-urlencoded"
        assert request.content == b"grant_type=client_credentials"

    def test_get_bytes_returns_raw_content(self) -> None:
        """Binary downloads return the body unchanged."""
        transport = FakeTransport([httpx.Response(200, content=b"\xff\xd8\xff")])
        client = _client(transport)

        assert asyncio.run(client.get_bytes("https://img.example/a.jpg")) == b"\xff\xd8\xff"

    def test_non_retryable_status_raises(self) -> None:
        """A 401 fails immediately."""
        transport = FakeTransport([httpx.Response(401, json={"error": "unauthorized"})])
        client = _client(transport)

        with pytest.raises(CatalogFetchError, match="401"):
            asyncio.run(client.get_json("https://example.com/api"))
        assert transport.call_count == 1

    def test_retries_transient_status(self) -> None:
        """429 and 5xx responses are retried until success."""
        transport = FakeTransport(
            [
                httpx.Response(429),
                httpx.Response(503),
                httpx.Response(200, json={"ok": True}),
            ]
        )
        client = _client(transport)

        assert asyncio.run(client.get_json("https://example.com/api")) == {"ok": True}
        assert transport.call_count == 3

    def test_retries_exhausted_raises(self) -> None:
        """Persistent transient failures give up after max_retries."""
        transport = FakeTransport([httpx.Response(500) for _ in range(3)])
        client = _client(transport, max_retries=2)

        with pytest.raises(CatalogFetchError, match="after 3 attempts"):
            asyncio.run(client.get_json("https://example.com/api"))
        assert transport.call_count == 3

    def test_transport_error_is_wrapped(self) -> None:
        """Connection failures surface as CatalogFetchError."""
        transport = FakeTransport([httpx.ConnectError("connection refused")])
        client = _client(transport)

        with pytest.raises(CatalogFetchError, match="connection refused"):
            asyncio.run(client.get_json("https://example.com/api"))

    def test_invalid_json_raises(self) -> None:
        """A 200 with a non-JSON body is a fetch error, not a crash."""
        transport = FakeTransport([httpx.Response(200, content=b"<html>")])
        client = _client(transport)

        with pytest.raises(CatalogFetchError, match="Invalid JSON"):
            asyncio.run(client.get_json("https://example.com/api"))

    def test_rate_limiting_delays_requests(self) -> None:
        """Consecutive requests are spaced by min_request_interval."""
        transport = FakeTransport()
        interval = 0.15
        client = _client(transport, min_request_interval=interval)

        async def two_requests() -> None:
            await client.get_json("https://example.com/1")
            await client.get_json("https://example.com/2")

        start = time.monotonic()
        asyncio.run(two_requests())
        elapsed = time.monotonic() - start

        assert elapsed >= interval
        assert transport.call_count == 2
