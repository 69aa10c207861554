"""Shared plumbing for the concrete research agents."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, ClassVar

from research_agents.core.config import ResearchAgentSettings
from research_agents.core.langbase import LangbaseClient
from research_agents.llm.factory import GenerationProviderFactory
from research_agents.llm.invoker import GenerationInvoker
from research_agents.llm.provider import GenerationProvider
from research_agents.memory.retriever import LangbaseMemoryStore, MemoryRetriever
from research_agents.search.aggregator import LangbaseWebSearch, SearchAggregator, SearchQuery
from research_agents.workflow import Step, StepOrchestrator, WorkflowRun, check_steps

logger = logging.getLogger(__name__)


class Toolkit:
    """The external collaborators one workflow run talks to.

    A toolkit is created per run and closed at that run's teardown.
    """

    def __init__(
        self,
        *,
        search: SearchAggregator,
        memory: MemoryRetriever,
        provider: GenerationProvider,
        langbase: LangbaseClient | None = None,
    ) -> None:
        self.search = search
        self.memory = memory
        self.provider = provider
        self._langbase = langbase

    def invoker(self, model: str) -> GenerationInvoker:
        return GenerationInvoker(self.provider, model=model)

    async def aclose(self) -> None:
        await self.provider.aclose()
        if self._langbase is not None:
            await self._langbase.aclose()

    @classmethod
    def from_settings(cls, settings: ResearchAgentSettings) -> Toolkit:
        langbase = LangbaseClient(
            api_key=settings.langbase_api_key,
            base_url=settings.langbase_base_url,
            timeout=settings.http_timeout_seconds,
        )
        return cls(
            search=SearchAggregator(LangbaseWebSearch(langbase)),
            memory=MemoryRetriever(LangbaseMemoryStore(langbase), top_k=settings.memory_top_k),
            provider=GenerationProviderFactory.create(settings, langbase),
            langbase=langbase,
        )


ToolkitFactory = Callable[[ResearchAgentSettings], Toolkit]


def normalize_input(value: object) -> str:
    """Validate the caller's free-text subject."""

    if not isinstance(value, str) or not value.strip():
        raise ValueError("Please provide a non-empty input string")
    return value.strip()


class ResearchAgent(ABC):
    """A named workflow built from search, memory and generation steps."""

    name: ClassVar[str]
    required_settings: ClassVar[tuple[str, ...]] = ("langbase_api_key", "openai_api_key")

    def __init__(
        self,
        settings: ResearchAgentSettings,
        *,
        toolkit_factory: ToolkitFactory | None = None,
    ) -> None:
        settings.require(*self.required_settings)
        self.settings = settings
        self._toolkit_factory = toolkit_factory or Toolkit.from_settings

    @abstractmethod
    def build_steps(self, tools: Toolkit) -> list[Step]:
        """Declare the workflow's steps, in execution order."""

    def web_query(self, text: str, total_results: int) -> SearchQuery:
        return SearchQuery(
            query=text,
            total_results=total_results,
            service=self.settings.search_service,
            credential=self.settings.exa_api_key,
        )

    async def run(self, input: str) -> WorkflowRun:
        """Execute the workflow once. Step failures are recorded on the run."""

        subject = normalize_input(input)
        tools = self._toolkit_factory(self.settings)
        try:
            steps = self.build_steps(tools)
            check_steps(steps)
        except BaseException:
            await tools.aclose()
            raise

        orchestrator = StepOrchestrator(
            name=self.name,
            debug=self.settings.debug,
            step_timeout=self.settings.step_timeout_seconds,
        )
        return await orchestrator.run(subject, steps, teardown=[tools.aclose])

    async def invoke(self, input: str) -> Any:
        """Execute the workflow and return its result, raising on failure."""

        run = await self.run(input)
        return run.unwrap()
