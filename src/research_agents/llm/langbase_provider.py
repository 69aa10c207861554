"""Langbase agent-run generation provider implementation."""

from __future__ import annotations

import json
import logging
from typing import Any

from research_agents.core.errors import ConfigurationError, ProviderError
from research_agents.core.langbase import LangbaseClient
from research_agents.llm.provider import GenerationProvider, GenerationRequest
from research_agents.schema.validator import to_response_format

logger = logging.getLogger(__name__)


class LangbaseAgentProvider(GenerationProvider):
    """Runs completions through Langbase's agent endpoint.

    Langbase forwards the call to the underlying model provider; the model is
    addressed as `provider:model` (e.g. `openai:gpt-4.1`) and the provider key
    travels in the `LB-LLM-KEY` header.
    """

    name = "langbase"

    def __init__(self, client: LangbaseClient, *, llm_api_key: str) -> None:
        if not llm_api_key:
            raise ConfigurationError("An LLM API key is required for Langbase agent runs")
        self._client = client
        self._llm_api_key = llm_api_key

    async def complete(self, request: GenerationRequest) -> str:
        payload: dict[str, Any] = {
            "model": request.model,
            "instructions": request.instructions,
            "input": [turn.to_message() for turn in request.turns],
            "stream": False,
        }
        if request.schema is not None:
            payload["response_format"] = to_response_format(request.schema)

        logger.debug(f"Running Langbase agent with {len(request.turns)} turns on {request.model}")
        body = await self._client.post(
            "/v1/agent/run",
            payload,
            provider=self.name,
            headers={"LB-LLM-KEY": self._llm_api_key},
        )

        output = body.get("output") if isinstance(body, dict) else None
        if output is None:
            raise ProviderError("Agent run returned no output", provider=self.name)
        if isinstance(output, str):
            return output
        # Some models hand back already-decoded JSON for structured runs.
        return json.dumps(output)
