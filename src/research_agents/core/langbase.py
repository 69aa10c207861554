"""Thin async wrapper around the Langbase REST API.

Keeps HTTP details (auth headers, base URL, error mapping) out of the search,
memory and generation providers, and makes them easy to test with
`httpx.MockTransport`.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from research_agents.core.errors import ConfigurationError, ProviderError

logger = logging.getLogger(__name__)


class LangbaseClient:
    """Small wrapper around `httpx.AsyncClient` for the Langbase endpoints we call."""

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = "https://api.langbase.com",
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not api_key:
            raise ConfigurationError("Langbase API key is required")

        self._base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._timeout = timeout
        # Opened on first request when not injected.
        self._client: httpx.AsyncClient | None = http_client
        self._headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "User-Agent": "research-agents",
        }

    @property
    def base_url(self) -> str:
        return self._base_url

    async def post(
        self,
        path: str,
        payload: dict[str, Any],
        *,
        provider: str,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """POST JSON and return the decoded body.

        Raises:
            ProviderError: on transport failures, non-2xx responses or a body
                that is not JSON. The httpx exception is kept as `__cause__`.
        """

        url = f"{self._base_url}/{path.lstrip('/')}"
        merged = {**self._headers, **(headers or {})}
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self._timeout))
        try:
            resp = await self._client.post(url, json=payload, headers=merged)
        except httpx.HTTPError as exc:
            logger.warning("Request to %s failed: %s", provider, exc, extra={"url": url})
            raise ProviderError(f"Request failed: {exc}", provider=provider) from exc

        if resp.is_error:
            raise ProviderError(
                _error_message(resp), provider=provider, status_code=resp.status_code
            )

        try:
            return resp.json()
        except ValueError as exc:
            raise ProviderError(
                "Response body is not valid JSON", provider=provider, status_code=resp.status_code
            ) from exc

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:200] or resp.reason_phrase
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
        if isinstance(error, str):
            return error
        if isinstance(body.get("message"), str):
            return body["message"]
    return resp.reason_phrase
