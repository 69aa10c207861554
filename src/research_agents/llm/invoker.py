"""Generation boundary: one call in, one tagged result out."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, overload

from research_agents.llm.provider import GenerationProvider, GenerationRequest, Turn
from research_agents.schema.validator import OutputSchema, SchemaModel, parse_json

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=SchemaModel)


@dataclass(frozen=True, slots=True)
class Text:
    """Free-text generation output, passed through unchanged."""

    text: str


@dataclass(frozen=True, slots=True)
class Structured(Generic[ModelT]):
    """Generation output that has been validated against its schema."""

    value: ModelT
    raw: str


class GenerationInvoker:
    """Send instructions and turns to a provider for a fixed model.

    With a schema, the provider is asked for constrained decoding and the
    output is still validated locally before it is returned; providers do not
    always honor the constraint. Provider errors are not retried.
    """

    def __init__(self, provider: GenerationProvider, *, model: str) -> None:
        self.provider = provider
        self.model = model

    @overload
    async def generate(
        self, instructions: str, turns: Sequence[Turn], schema: None = None
    ) -> Text: ...

    @overload
    async def generate(
        self, instructions: str, turns: Sequence[Turn], schema: OutputSchema[ModelT]
    ) -> Structured[ModelT]: ...

    async def generate(
        self,
        instructions: str,
        turns: Sequence[Turn],
        schema: OutputSchema[Any] | None = None,
    ) -> Text | Structured[Any]:
        request = GenerationRequest(
            model=self.model,
            instructions=instructions,
            turns=tuple(turns),
            schema=schema,
        )
        raw = await self.provider.complete(request)

        if schema is None:
            return Text(raw)

        value = parse_json(schema, raw)
        logger.debug("Structured output validated", extra={"schema": schema.name})
        return Structured(value=value, raw=raw)
