"""Concurrent web search fan-out with a strict all-or-nothing join."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from research_agents.core.errors import ConfigurationError
from research_agents.core.langbase import LangbaseClient

logger = logging.getLogger(__name__)

SNIPPET_CHARS = 280


@dataclass(frozen=True, slots=True)
class SearchQuery:
    query: str
    total_results: int = 5
    service: str = "exa"
    credential: str = ""
    domains: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class SearchResult:
    """A provider-independent search hit."""

    url: str
    content: str
    snippet: str = ""

    def to_json(self) -> dict[str, str]:
        return {"url": self.url, "content": self.content, "snippet": self.snippet}


class SearchProvider(Protocol):
    async def search(self, query: SearchQuery) -> list[SearchResult]: ...


class LangbaseWebSearch:
    """Search provider backed by the Langbase web-search tool."""

    def __init__(self, client: LangbaseClient) -> None:
        self._client = client

    async def search(self, query: SearchQuery) -> list[SearchResult]:
        if not query.credential:
            raise ConfigurationError(f"Missing credential for search service {query.service!r}")

        payload: dict[str, Any] = {
            "query": query.query,
            "service": query.service,
            "totalResults": query.total_results,
        }
        if query.domains:
            payload["domains"] = list(query.domains)

        body = await self._client.post(
            "/v1/tools/web-search",
            payload,
            provider=f"web-search:{query.service}",
            headers={"LB-WEB-SEARCH-KEY": query.credential},
        )
        return [normalize_result(item) for item in _as_list(body)]


def _as_list(body: Any) -> list[Any]:
    if isinstance(body, list):
        return body
    if isinstance(body, dict):
        for key in ("results", "data"):
            if isinstance(body.get(key), list):
                return body[key]
    return []


def normalize_result(item: Any) -> SearchResult:
    """Map a raw provider hit onto `SearchResult`."""

    if not isinstance(item, dict):
        return SearchResult(url="", content=str(item), snippet=str(item)[:SNIPPET_CHARS])

    url = item.get("url") or ""
    content = item.get("content") or item.get("text") or item.get("title") or ""
    snippet = item.get("snippet") or content[:SNIPPET_CHARS]
    return SearchResult(url=str(url), content=str(content), snippet=str(snippet))


class SearchAggregator:
    """Issue several queries at once and join their results positionally.

    `search(queries)[i]` always holds the results of `queries[i]`. If any query
    fails, the still-pending ones are cancelled and the original error is
    raised; partial results are never returned.
    """

    def __init__(self, provider: SearchProvider) -> None:
        self._provider = provider

    async def search(
        self, queries: Sequence[SearchQuery]
    ) -> tuple[tuple[SearchResult, ...], ...]:
        if not queries:
            return ()

        logger.debug("Dispatching %d search queries", len(queries))
        tasks = [asyncio.ensure_future(self._provider.search(q)) for q in queries]
        try:
            results = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            # Let cancelled siblings unwind before the failure leaves the step.
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        logger.debug(
            "Search join complete",
            extra={"result_counts": [len(r) for r in results]},
        )
        return tuple(tuple(r) for r in results)

    async def search_one(self, query: SearchQuery) -> tuple[SearchResult, ...]:
        (results,) = await self.search([query])
        return results


def flatten(results: Iterable[Sequence[SearchResult]]) -> list[SearchResult]:
    """Concatenate per-query result lists in order. Duplicates are kept."""

    return [hit for batch in results for hit in batch]
