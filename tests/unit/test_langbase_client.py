"""Unit tests for the Langbase HTTP wrapper."""

from __future__ import annotations

import httpx
import pytest

from research_agents.core.errors import ConfigurationError, ProviderError
from research_agents.core.langbase import LangbaseClient


@pytest.fixture
def opened(monkeypatch: pytest.MonkeyPatch) -> list[httpx.AsyncClient]:
    """Record every client LangbaseClient opens, routed to a canned transport."""

    clients: list[httpx.AsyncClient] = []
    real = httpx.AsyncClient
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"ok": True}))

    def _open(**kwargs) -> httpx.AsyncClient:
        client = real(transport=transport, **kwargs)
        clients.append(client)
        return client

    monkeypatch.setattr(httpx, "AsyncClient", _open)
    return clients


@pytest.mark.asyncio
async def test_client_opens_on_first_request_and_closes_once(
    opened: list[httpx.AsyncClient],
) -> None:
    client = LangbaseClient(api_key="lb")
    assert opened == []

    assert await client.post("/v1/memory/retrieve", {}, provider="memory") == {"ok": True}
    assert await client.post("/v1/memory/retrieve", {}, provider="memory") == {"ok": True}
    await client.aclose()
    await client.aclose()

    assert len(opened) == 1
    assert opened[0].is_closed


@pytest.mark.asyncio
async def test_closing_an_unused_client_opens_nothing(opened: list[httpx.AsyncClient]) -> None:
    await LangbaseClient(api_key="lb").aclose()

    assert opened == []


@pytest.mark.asyncio
async def test_injected_client_is_left_open() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(503, json={"error": "busy"}))
    async with httpx.AsyncClient(transport=transport) as http:
        client = LangbaseClient(api_key="lb", http_client=http)

        with pytest.raises(ProviderError) as exc_info:
            await client.post("/v1/agent/run", {}, provider="generation")
        await client.aclose()

        assert not http.is_closed
    assert exc_info.value.status_code == 503
    assert str(exc_info.value) == "[generation] busy (status 503)"


def test_api_key_is_required() -> None:
    with pytest.raises(ConfigurationError):
        LangbaseClient(api_key="")
