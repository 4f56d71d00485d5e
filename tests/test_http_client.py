"""
Tests for the HTTP client retry policy
"""

from unittest.mock import patch

import httpx
import pytest
from tenacity import wait_none

from onchain_markets.infrastructure import http_client


class FakeAsyncClient:
    """Stands in for httpx.AsyncClient, replaying queued outcomes in order"""

    outcomes: list = []
    calls = 0

    def __init__(self, **kwargs):
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False

    async def get(self, url, params=None, headers=None):
        type(self).calls += 1
        outcome = type(self).outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return httpx.Response(outcome[0], json=outcome[1], request=httpx.Request("GET", url))


@pytest.fixture
def fake_client():
    FakeAsyncClient.outcomes = []
    FakeAsyncClient.calls = 0
    with patch.object(http_client.httpx, "AsyncClient", FakeAsyncClient):
        yield FakeAsyncClient


def fast_get():
    return http_client.get.retry_with(wait=wait_none())


class TestRetryPolicy:
    @pytest.mark.asyncio
    async def test_single_attempt_by_default(self, fake_client):
        fake_client.outcomes = [httpx.ConnectError("refused"), (200, {"ok": True})]

        with pytest.raises(httpx.ConnectError):
            await fast_get()("https://example.test/a")
        assert fake_client.calls == 1

    @pytest.mark.asyncio
    async def test_transport_errors_retried_when_configured(self, fake_client):
        http_client.configure_retries(3)
        fake_client.outcomes = [
            httpx.ConnectError("refused"),
            httpx.ReadTimeout("slow"),
            (200, {"ok": True}),
        ]

        assert await fast_get()("https://example.test/a") == {"ok": True}
        assert fake_client.calls == 3

    @pytest.mark.asyncio
    async def test_gives_up_after_limit(self, fake_client):
        http_client.configure_retries(2)
        fake_client.outcomes = [httpx.ConnectError("a"), httpx.ConnectError("b")]

        with pytest.raises(httpx.ConnectError, match="b"):
            await fast_get()("https://example.test/a")
        assert fake_client.calls == 2

    @pytest.mark.asyncio
    async def test_status_errors_not_retried(self, fake_client):
        http_client.configure_retries(3)
        fake_client.outcomes = [(503, {"error": "busy"}), (200, {"ok": True})]

        with pytest.raises(httpx.HTTPStatusError):
            await fast_get()("https://example.test/a")
        assert fake_client.calls == 1

    def test_rejects_zero_attempts(self):
        with pytest.raises(ValueError):
            http_client.configure_retries(0)
