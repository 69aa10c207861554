"""OpenAI generation provider implementation."""

from __future__ import annotations

import logging
from typing import Any

import openai
from openai import AsyncOpenAI

from research_agents.core.errors import ConfigurationError, ProviderError
from research_agents.llm.provider import GenerationProvider, GenerationRequest, bare_model_name
from research_agents.schema.validator import to_response_format

logger = logging.getLogger(__name__)


class OpenAIProvider(GenerationProvider):
    """OpenAI chat completions provider."""

    name = "openai"

    def __init__(
        self,
        *,
        api_key: str,
        timeout: float | None = None,
        temperature: float | None = None,
        client: AsyncOpenAI | None = None,
    ) -> None:
        """Initialize the OpenAI provider.

        Args:
            api_key: OpenAI API key.
            timeout: Request timeout in seconds (None = no timeout).
            temperature: Sampling temperature. Omitted from requests when None,
                since some models only accept their default.
            client: Pre-built client, mainly for tests.

        Raises:
            ConfigurationError: If API key is not provided.
        """
        if client is None and not api_key:
            raise ConfigurationError("OpenAI API key is required")

        self.client = client or AsyncOpenAI(api_key=api_key, timeout=timeout, max_retries=0)
        self.temperature = temperature

    async def complete(self, request: GenerationRequest) -> str:
        messages: list[dict[str, str]] = [{"role": "system", "content": request.instructions}]
        messages.extend(turn.to_message() for turn in request.turns)

        kwargs: dict[str, Any] = {}
        if request.schema is not None:
            kwargs["response_format"] = to_response_format(request.schema)
        if self.temperature is not None:
            kwargs["temperature"] = self.temperature

        model = bare_model_name(request.model)
        logger.debug(f"Generating chat completion with {len(messages)} messages on {model}")

        try:
            response = await self.client.chat.completions.create(
                model=model,
                messages=messages,  # type: ignore[arg-type]
                stream=False,
                **kwargs,
            )
        except openai.APIStatusError as e:
            raise ProviderError(e.message, provider=self.name, status_code=e.status_code) from e
        except openai.APIError as e:
            raise ProviderError(str(e), provider=self.name) from e

        message = response.choices[0].message
        if message.content is None and getattr(message, "refusal", None):
            raise ProviderError(f"Model refused: {message.refusal}", provider=self.name)

        content = message.content or ""
        logger.debug(f"Generated {len(content)} characters")
        return content

    async def aclose(self) -> None:
        await self.client.close()
