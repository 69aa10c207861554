"""Settings for research workflows.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

Settings are built once by the caller and passed explicitly into agents and
providers. Nothing below `research_agents.core` reads the process environment.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from research_agents.core.errors import ConfigurationError


class ResearchAgentSettings(BaseSettings):
    """Settings for the research agents.

    Environment variables:
    - LANGBASE_API_KEY
    - EXA_API_KEY
    - OPENAI_API_KEY
    - GENERATION_PROVIDER     (optional, "openai" or "langbase")
    - LOG_LEVEL               (optional)
    - WORKFLOW_DEBUG          (optional)
    - WORKFLOW_STEP_TIMEOUT   (optional, seconds)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `ResearchAgentSettings(_env_file=path_to_env)`.
    """

    # Credentials default to empty; agents call `require()` for the ones they use.
    langbase_api_key: str = Field(
        default="",
        validation_alias="LANGBASE_API_KEY",
        description="Langbase API key (web search, memory and agent endpoints)",
    )
    langbase_base_url: str = Field(
        default="https://api.langbase.com",
        validation_alias="LANGBASE_BASE_URL",
        description="Langbase API base URL",
    )
    exa_api_key: str = Field(
        default="",
        validation_alias="EXA_API_KEY",
        description="Credential for the web search service",
    )
    openai_api_key: str = Field(
        default="",
        validation_alias="OPENAI_API_KEY",
        description="OpenAI API key used for generation",
    )

    generation_provider: Literal["openai", "langbase"] = Field(
        default="openai",
        validation_alias="GENERATION_PROVIDER",
        description="Which generation backend to call",
    )
    search_service: str = Field(
        default="exa",
        validation_alias="SEARCH_SERVICE",
        description="Search service identifier forwarded to the web search tool",
    )

    initiative_model: str = Field(
        default="openai:gpt-5-mini-2025-08-07",
        validation_alias="INITIATIVE_MODEL",
    )
    dossier_model: str = Field(
        default="openai:gpt-4.1",
        validation_alias="DOSSIER_MODEL",
    )
    pdf_chat_model: str = Field(
        default="openai:gpt-5-mini-2025-08-07",
        validation_alias="PDF_CHAT_MODEL",
    )

    initiative_memory: str = Field(
        default="ai-intelligence-reports-1755091594925",
        validation_alias="INITIATIVE_MEMORY",
        description="Memory store holding prior intelligence reports",
    )
    dossier_memory: str = Field(
        default="intelligence-sources-1755005301639",
        validation_alias="DOSSIER_MEMORY",
        description="Memory store holding dossier guidelines",
    )
    pdf_memory: str = Field(
        default="pdf-chat-memory-1755112417420",
        validation_alias="PDF_MEMORY",
        description="Memory store holding the indexed document",
    )
    memory_top_k: int | None = Field(
        default=None,
        gt=0,
        validation_alias="MEMORY_TOP_K",
        description="Passages per retrieval (None = the memory store's default)",
    )

    http_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        validation_alias="HTTP_TIMEOUT_SECONDS",
        description="Transport timeout for provider calls (None = wait indefinitely)",
    )
    step_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        validation_alias="WORKFLOW_STEP_TIMEOUT",
        description="Default per-step deadline (None = unbounded)",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )
    debug: bool = Field(
        default=False,
        validation_alias="WORKFLOW_DEBUG",
        description="Log per-step timings for every workflow run",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    def require(self, *names: str) -> None:
        """Fail fast when any of the named credentials is empty."""

        missing = [name for name in names if not str(getattr(self, name, "") or "").strip()]
        if missing:
            aliases = [
                str(type(self).model_fields[name].validation_alias or name).upper()
                for name in missing
            ]
            raise ConfigurationError(f"Missing required settings: {', '.join(aliases)}")
