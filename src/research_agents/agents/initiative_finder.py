"""AI initiative finder: structured competitive intelligence for a company."""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import UTC, date, datetime

from research_agents.core.config import ResearchAgentSettings
from research_agents.llm.provider import Turn
from research_agents.memory.retriever import join_passages
from research_agents.schema.validator import OutputSchema, SchemaModel
from research_agents.search.aggregator import flatten
from research_agents.workflow import Step, WorkflowRun

from . import prompts
from .base import ResearchAgent, Toolkit, ToolkitFactory

NEWS_SITES = (
    "site:techcrunch.com OR site:venturebeat.com OR site:reuters.com "
    "OR site:bloomberg.com OR site:prnewswire.com"
)
JOB_SITES = "site:linkedin.com OR site:glassdoor.com OR site:indeed.com"


class Initiative(SchemaModel):
    title: str
    description: str
    date: str
    source_link: str
    key_phrases: list[str]


class CompetitiveIntelligence(SchemaModel):
    company: str
    last_updated: str
    updates_found: bool
    confidence_score: float
    initiatives: list[Initiative]


COMPETITIVE_INTELLIGENCE = OutputSchema("CompetitiveIntelligence", CompetitiveIntelligence)


def _today() -> date:
    return datetime.now(tz=UTC).date()


class InitiativeFinderAgent(ResearchAgent):
    """Tracks a company's recent AI activity.

    Steps: three web searches (news, hiring, product launches), a lookup of
    prior intelligence reports, then one schema-constrained analysis.
    """

    name = "ai-initiative-finder"
    required_settings = ("langbase_api_key", "exa_api_key", "openai_api_key")

    def __init__(
        self,
        settings: ResearchAgentSettings,
        *,
        toolkit_factory: ToolkitFactory | None = None,
        today: Callable[[], date] = _today,
    ) -> None:
        super().__init__(settings, toolkit_factory=toolkit_factory)
        self._today = today

    def build_steps(self, tools: Toolkit) -> list[Step]:
        settings = self.settings

        async def search_ai_activities(run: WorkflowRun):
            return await tools.search.search_one(
                self.web_query(
                    f"{run.input} artificial intelligence machine learning generative AI "
                    f"research team investment partnership acquisition {NEWS_SITES}",
                    10,
                )
            )

        async def search_job_postings(run: WorkflowRun):
            return await tools.search.search_one(
                self.web_query(
                    f'{run.input} "AI engineer" "machine learning" "head of AI" '
                    f'"AI research" "artificial intelligence" hiring jobs {JOB_SITES}',
                    5,
                )
            )

        async def search_product_launches(run: WorkflowRun):
            year = self._today().year
            return await tools.search.search_one(
                self.web_query(
                    f'{run.input} "AI product" "AI feature" "generative AI" '
                    f'"machine learning model" launch announcement {year}',
                    8,
                )
            )

        async def retrieve_intelligence_context(run: WorkflowRun):
            return await tools.memory.retrieve(
                f"{run.input} AI competitive intelligence analysis trends patterns",
                [settings.initiative_memory],
            )

        async def analyze_findings(run: WorkflowRun) -> CompetitiveIntelligence:
            all_results = flatten(
                run.result(step_id)
                for step_id in (
                    "search_ai_activities",
                    "search_job_postings",
                    "search_product_launches",
                )
            )
            context = join_passages(run.result("retrieve_intelligence_context"))

            instructions = prompts.INITIATIVE_ANALYST.format(
                context=context, today=self._today().isoformat()
            )
            request = prompts.INITIATIVE_REQUEST.format(
                subject=run.input,
                results=json.dumps([r.to_json() for r in all_results], indent=2),
            )
            result = await tools.invoker(settings.initiative_model).generate(
                instructions, [Turn("user", request)], COMPETITIVE_INTELLIGENCE
            )
            return result.value

        return [
            Step("search_ai_activities", search_ai_activities),
            Step("search_job_postings", search_job_postings),
            Step("search_product_launches", search_product_launches),
            Step("retrieve_intelligence_context", retrieve_intelligence_context),
            Step("analyze_findings", analyze_findings),
        ]
