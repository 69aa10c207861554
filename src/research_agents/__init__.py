"""Research agents.

Agentic research workflows: ordered steps that fan out web searches, consult
memory stores, and hand the gathered evidence to a language model for free
text or a schema-validated report.
"""

__version__ = "0.1.0"

from research_agents.core.config import ResearchAgentSettings

__all__ = ["__version__", "ResearchAgentSettings"]
