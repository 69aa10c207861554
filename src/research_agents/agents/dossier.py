"""Dossier analyst: a verified intelligence report on a person."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

from research_agents.llm.provider import Turn
from research_agents.memory.retriever import join_passages
from research_agents.search.aggregator import SearchResult
from research_agents.workflow import Step, WorkflowRun

from . import prompts
from .base import ResearchAgent, Toolkit

GUIDELINES_QUERY = "intelligence gathering guidelines dossier structure"


@dataclass(frozen=True, slots=True)
class SearchCategory:
    key: str
    heading: str
    keywords: str
    total_results: int


SEARCH_CATEGORIES: tuple[SearchCategory, ...] = (
    SearchCategory("professional", "PROFESSIONAL INFORMATION", "LinkedIn professional profile career", 5),
    SearchCategory("news", "NEWS AND MEDIA", "news articles press releases media mentions", 5),
    SearchCategory("social", "SOCIAL MEDIA", "Twitter X social media online presence", 3),
    SearchCategory("academic", "ACADEMIC/ACHIEVEMENTS", "education university degree achievements awards", 3),
    SearchCategory("affiliations", "AFFILIATIONS", "company organization board member executive", 4),
    SearchCategory("speaking", "SPEAKING/INTERVIEWS", "speaker conference presentation interview podcast", 3),
)


def format_section(results: Sequence[SearchResult]) -> str:
    return "\n\n".join(f"Source: {r.url}\nContent: {r.content}" for r in results)


class DossierAnalystAgent(ResearchAgent):
    """Builds a person dossier.

    The search step fans out one query per category and joins them all before
    analysis; a single failed query fails the step.
    """

    name = "dossier-analyst"
    required_settings = ("langbase_api_key", "exa_api_key", "openai_api_key")

    def build_steps(self, tools: Toolkit) -> list[Step]:
        settings = self.settings

        async def retrieve_guidelines(run: WorkflowRun):
            return await tools.memory.retrieve(GUIDELINES_QUERY, [settings.dossier_memory])

        async def comprehensive_search(
            run: WorkflowRun,
        ) -> Mapping[str, tuple[SearchResult, ...]]:
            queries = [
                self.web_query(f"{run.input} {c.keywords}", c.total_results)
                for c in SEARCH_CATEGORIES
            ]
            batches = await tools.search.search(queries)
            return MappingProxyType(
                {c.key: batch for c, batch in zip(SEARCH_CATEGORIES, batches, strict=True)}
            )

        async def analyze_information(run: WorkflowRun) -> str:
            found = run.result("comprehensive_search")
            sections = "\n\n".join(
                f"{c.heading}:\n{format_section(found[c.key])}" for c in SEARCH_CATEGORIES
            )
            result = await tools.invoker(settings.dossier_model).generate(
                prompts.DOSSIER_ANALYST.format(
                    guidelines=join_passages(run.result("retrieve_guidelines"))
                ),
                [Turn("user", prompts.DOSSIER_ANALYSIS_REQUEST.format(subject=run.input, sections=sections))],
            )
            return result.text

        async def generate_dossier(run: WorkflowRun) -> str:
            found = run.result("comprehensive_search")
            raw = {key: [r.to_json() for r in batch] for key, batch in found.items()}
            request = prompts.DOSSIER_REQUEST.format(
                subject=run.input,
                analysis=run.result("analyze_information"),
                results=json.dumps(raw, indent=2),
            )
            result = await tools.invoker(settings.dossier_model).generate(
                prompts.DOSSIER_WRITER, [Turn("user", request)]
            )
            return result.text

        return [
            Step("retrieve_guidelines", retrieve_guidelines),
            Step("comprehensive_search", comprehensive_search),
            Step("analyze_information", analyze_information),
            Step("generate_dossier", generate_dossier),
        ]
