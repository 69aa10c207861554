"""Factory for creating generation providers."""

import logging

from research_agents.core.config import ResearchAgentSettings
from research_agents.core.errors import ConfigurationError
from research_agents.core.langbase import LangbaseClient
from research_agents.llm.langbase_provider import LangbaseAgentProvider
from research_agents.llm.openai_provider import OpenAIProvider
from research_agents.llm.provider import GenerationProvider

logger = logging.getLogger(__name__)


class GenerationProviderFactory:
    """Factory for creating generation provider instances."""

    @staticmethod
    def create(
        settings: ResearchAgentSettings,
        langbase: LangbaseClient | None = None,
    ) -> GenerationProvider:
        """Create a generation provider based on settings.

        Args:
            settings: Settings naming the provider and carrying credentials.
            langbase: Shared Langbase client, required for the langbase provider.

        Returns:
            Configured provider instance.

        Raises:
            ConfigurationError: If the provider is unsupported or misconfigured.
        """
        logger.info(f"Creating generation provider: {settings.generation_provider}")

        if settings.generation_provider == "openai":
            settings.require("openai_api_key")
            return OpenAIProvider(
                api_key=settings.openai_api_key,
                timeout=settings.http_timeout_seconds,
            )
        elif settings.generation_provider == "langbase":
            if langbase is None:
                raise ConfigurationError("The langbase provider needs a Langbase client")
            settings.require("openai_api_key")
            return LangbaseAgentProvider(langbase, llm_api_key=settings.openai_api_key)
        else:
            raise ConfigurationError(
                f"Unsupported generation provider: {settings.generation_provider}"
            )
