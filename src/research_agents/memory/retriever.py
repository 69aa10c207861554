"""Semantic retrieval from named memory stores."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from research_agents.core.errors import ConfigurationError
from research_agents.core.langbase import LangbaseClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MemoryPassage:
    text: str
    score: float
    source_ref: str = ""


class MemoryStore(Protocol):
    async def retrieve(
        self, query: str, memory_names: Sequence[str], top_k: int | None
    ) -> list[MemoryPassage]: ...


class LangbaseMemoryStore:
    """Memory store backed by Langbase memory retrieval."""

    def __init__(self, client: LangbaseClient) -> None:
        self._client = client

    async def retrieve(
        self, query: str, memory_names: Sequence[str], top_k: int | None
    ) -> list[MemoryPassage]:
        payload: dict[str, Any] = {
            "query": query,
            "memory": [{"name": name} for name in memory_names],
        }
        # Without topK the store applies its own default.
        if top_k is not None:
            payload["topK"] = top_k
        body = await self._client.post("/v1/memory/retrieve", payload, provider="memory")
        if not isinstance(body, list):
            return []
        return [_to_passage(item) for item in body if isinstance(item, dict)]


def _to_passage(item: dict[str, Any]) -> MemoryPassage:
    meta = item.get("meta") if isinstance(item.get("meta"), dict) else {}
    source = meta.get("documentName") or item.get("name") or ""
    score = item.get("similarity", item.get("score", 0.0))
    return MemoryPassage(
        text=str(item.get("text") or ""),
        score=float(score) if isinstance(score, int | float) else 0.0,
        source_ref=str(source),
    )


class MemoryRetriever:
    """Query memory stores, preserving the store's ranking order."""

    def __init__(self, store: MemoryStore, *, top_k: int | None = None) -> None:
        self._store = store
        self._top_k = top_k

    async def retrieve(
        self, query: str, memory_names: Sequence[str]
    ) -> tuple[MemoryPassage, ...]:
        if not memory_names:
            raise ConfigurationError("At least one memory name is required")

        passages = await self._store.retrieve(query, list(memory_names), self._top_k)
        logger.debug(
            "Retrieved %d passages", len(passages), extra={"memory": list(memory_names)}
        )
        return tuple(passages)


def join_passages(passages: Iterable[MemoryPassage], separator: str = "\n") -> str:
    """Join passage texts in ranking order into a single context string."""

    return separator.join(p.text for p in passages)
