"""Question answering over an indexed PDF document."""

from __future__ import annotations

from research_agents.llm.provider import Turn
from research_agents.memory.retriever import join_passages
from research_agents.workflow import Step, WorkflowRun

from . import prompts
from .base import ResearchAgent, Toolkit


class PdfChatAgent(ResearchAgent):
    name = "pdf-chat"

    def build_steps(self, tools: Toolkit) -> list[Step]:
        settings = self.settings

        async def retrieve_pdf_content(run: WorkflowRun):
            return await tools.memory.retrieve(run.input, [settings.pdf_memory])

        async def generate_pdf_response(run: WorkflowRun) -> str:
            context = join_passages(run.result("retrieve_pdf_content"), separator="\n\n")
            result = await tools.invoker(settings.pdf_chat_model).generate(
                prompts.PDF_ASSISTANT.format(context=context),
                [Turn("user", run.input)],
            )
            return result.text

        return [
            Step("retrieve_pdf_content", retrieve_pdf_content),
            Step("generate_pdf_response", generate_pdf_response),
        ]
