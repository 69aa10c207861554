"""Concrete research agents."""

from research_agents.agents.base import ResearchAgent, Toolkit, normalize_input
from research_agents.agents.dossier import DossierAnalystAgent
from research_agents.agents.initiative_finder import (
    COMPETITIVE_INTELLIGENCE,
    CompetitiveIntelligence,
    Initiative,
    InitiativeFinderAgent,
)
from research_agents.agents.pdf_chat import PdfChatAgent

AGENTS: dict[str, type[ResearchAgent]] = {
    "initiatives": InitiativeFinderAgent,
    "dossier": DossierAnalystAgent,
    "pdf-chat": PdfChatAgent,
}

__all__ = [
    "AGENTS",
    "COMPETITIVE_INTELLIGENCE",
    "CompetitiveIntelligence",
    "DossierAnalystAgent",
    "Initiative",
    "InitiativeFinderAgent",
    "PdfChatAgent",
    "ResearchAgent",
    "Toolkit",
    "normalize_input",
]
