"""Test configuration and fixtures."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence

import pytest

from research_agents.agents.base import Toolkit
from research_agents.core.config import ResearchAgentSettings
from research_agents.llm.provider import GenerationProvider, GenerationRequest
from research_agents.memory.retriever import MemoryPassage, MemoryRetriever
from research_agents.search.aggregator import SearchAggregator, SearchQuery, SearchResult


class FakeSearchProvider:
    """In-memory search provider.

    Returns `results` for every query, except queries containing `fail_on`,
    which raise `error`. `delay` maps a query substring to a sleep in seconds.
    """

    def __init__(
        self,
        results: Sequence[SearchResult] = (),
        *,
        fail_on: str | None = None,
        error: Exception | None = None,
        delay: dict[str, float] | None = None,
    ) -> None:
        self.results = list(results)
        self.fail_on = fail_on
        self.error = error or ConnectionError("network unreachable")
        self.delay = delay or {}
        self.calls: list[SearchQuery] = []
        self.cancelled: list[str] = []

    async def search(self, query: SearchQuery) -> list[SearchResult]:
        self.calls.append(query)
        try:
            for needle, seconds in self.delay.items():
                if needle in query.query:
                    await asyncio.sleep(seconds)
        except asyncio.CancelledError:
            self.cancelled.append(query.query)
            raise
        if self.fail_on is not None and self.fail_on in query.query:
            raise self.error
        return [
            SearchResult(url=r.url, content=f"{r.content} [{query.query}]", snippet=r.snippet)
            for r in self.results
        ]


class FakeMemoryStore:
    def __init__(self, passages: Sequence[MemoryPassage] = ()) -> None:
        self.passages = list(passages)
        self.calls: list[tuple[str, list[str], int | None]] = []

    async def retrieve(
        self, query: str, memory_names: Sequence[str], top_k: int | None
    ) -> list[MemoryPassage]:
        self.calls.append((query, list(memory_names), top_k))
        return list(self.passages)


class FakeGenerationProvider(GenerationProvider):
    """Returns queued outputs in order and records every request."""

    name = "fake"

    def __init__(self, outputs: Sequence[str | Exception] = ()) -> None:
        self.outputs = list(outputs)
        self.requests: list[GenerationRequest] = []
        self.closed = 0

    async def complete(self, request: GenerationRequest) -> str:
        self.requests.append(request)
        outcome = self.outputs.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def aclose(self) -> None:
        self.closed += 1


@pytest.fixture
def settings() -> ResearchAgentSettings:
    """Provide settings with test credentials and no .env lookup."""
    return ResearchAgentSettings(
        _env_file=None,
        langbase_api_key="lb-test",
        exa_api_key="exa-test",
        openai_api_key="sk-test",
    )


@pytest.fixture
def search_provider() -> FakeSearchProvider:
    return FakeSearchProvider(
        [
            SearchResult(url="https://example.com/a", content="A", snippet="a"),
            SearchResult(url="https://example.com/b", content="B", snippet="b"),
            SearchResult(url="https://example.com/c", content="C", snippet="c"),
        ]
    )


@pytest.fixture
def memory_store() -> FakeMemoryStore:
    return FakeMemoryStore()


@pytest.fixture
def make_toolkit_factory() -> Callable[..., Callable[[ResearchAgentSettings], Toolkit]]:
    """Build a toolkit factory around fake collaborators."""

    def _make(
        search: FakeSearchProvider,
        memory: FakeMemoryStore,
        generation: FakeGenerationProvider,
    ) -> Callable[[ResearchAgentSettings], Toolkit]:
        def factory(settings: ResearchAgentSettings) -> Toolkit:
            return Toolkit(
                search=SearchAggregator(search),
                memory=MemoryRetriever(memory, top_k=settings.memory_top_k),
                provider=generation,
            )

        return factory

    return _make
