"""Abstract base class for generation providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Literal

from research_agents.schema.validator import OutputSchema

Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True, slots=True)
class Turn:
    role: Role
    content: str

    def to_message(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True, slots=True)
class GenerationRequest:
    """Everything a provider needs for a single completion.

    Streaming is not supported; `stream` is always False.
    """

    model: str
    instructions: str
    turns: tuple[Turn, ...] = ()
    schema: OutputSchema[Any] | None = None
    stream: bool = field(default=False, init=False)


class GenerationProvider(ABC):
    """Abstract base class for generation providers.

    This interface allows pluggable backends (OpenAI, Langbase agent runs, etc.)
    """

    name: str = "generation"

    @abstractmethod
    async def complete(self, request: GenerationRequest) -> str:
        """Run a completion and return the raw output text.

        When `request.schema` is set the provider must request constrained
        decoding for that schema in strict mode.

        Raises:
            ProviderError: If the provider call fails.
        """
        pass

    async def aclose(self) -> None:
        """Release any transport held by the provider."""
        return None


def bare_model_name(model: str) -> str:
    """Strip a `provider:` prefix, e.g. `openai:gpt-4.1` -> `gpt-4.1`."""

    _, sep, name = model.partition(":")
    return name if sep else model
