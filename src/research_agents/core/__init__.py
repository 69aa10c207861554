"""Core package initialization."""

from research_agents.core.config import ResearchAgentSettings
from research_agents.core.errors import (
    ConfigurationError,
    ProviderError,
    ResearchAgentError,
    StepTimeoutError,
    ValidationError,
    Violation,
)

__all__ = [
    "ConfigurationError",
    "ProviderError",
    "ResearchAgentError",
    "ResearchAgentSettings",
    "StepTimeoutError",
    "ValidationError",
    "Violation",
]
