"""Tests retrying real HTTP calls against a flaky mock endpoint."""

import httpx
import pytest
from jittered_retry import async_retry_decorrelated, retry


def flaky_handler(failures: int):
    """Build a transport handler answering 503 `failures` times, then 200."""
    state = {"calls": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        state["calls"] += 1
        if state["calls"] <= failures:
            return httpx.Response(503, text="unavailable")
        return httpx.Response(200, json={"status": "ok"})

    return handler, state


class TestSyncHttpRetry:
    """Retry an httpx.Client request."""

    def test_recovers_from_server_errors(self):
        """Two 503s followed by a 200 yield the JSON body."""
        handler, state = flaky_handler(failures=2)
        sleeps = []

        with httpx.Client(transport=httpx.MockTransport(handler)) as client:

            def fetch() -> dict:
                response = client.get("http://test/health")
                response.raise_for_status()
                return response.json()

            result = retry(5, 0.01, 0.1, fetch, sleep=sleeps.append)

        assert result == {"status": "ok"}
        assert state["calls"] == 3
        assert len(sleeps) == 2

    def test_surfaces_last_http_error(self):
        """A persistently failing endpoint raises the final HTTPStatusError."""
        handler, state = flaky_handler(failures=10)

        with httpx.Client(transport=httpx.MockTransport(handler)) as client:

            def fetch() -> dict:
                response = client.get("http://test/health")
                response.raise_for_status()
                return response.json()

            with pytest.raises(httpx.HTTPStatusError) as exc_info:
                retry(3, 0.01, 0.1, fetch, sleep=lambda _: None)

        assert exc_info.value.response.status_code == 503
        assert state["calls"] == 3


class TestAsyncHttpRetry:
    """Retry an httpx.AsyncClient request."""

    @pytest.mark.asyncio
    async def test_recovers_from_server_errors(self):
        """Async client recovers with decorrelated jitter."""
        handler, state = flaky_handler(failures=1)
        sleeps = []

        async def fake_sleep(delay: float) -> None:
            sleeps.append(delay)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:

            async def fetch() -> dict:
                response = await client.get("http://test/health")
                response.raise_for_status()
                return response.json()

            result = await async_retry_decorrelated(3, 0.01, 0.1, fetch, sleep=fake_sleep)

        assert result == {"status": "ok"}
        assert state["calls"] == 2
        assert len(sleeps) == 1
        assert 0.01 <= sleeps[0] <= 0.1
