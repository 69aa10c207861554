"""LLM package initialization."""

from research_agents.llm.factory import GenerationProviderFactory
from research_agents.llm.invoker import GenerationInvoker, Structured, Text
from research_agents.llm.provider import GenerationProvider, GenerationRequest, Turn

__all__ = [
    "GenerationInvoker",
    "GenerationProvider",
    "GenerationProviderFactory",
    "GenerationRequest",
    "Structured",
    "Text",
    "Turn",
]
