"""Memory store retrieval."""

from research_agents.memory.retriever import (
    LangbaseMemoryStore,
    MemoryPassage,
    MemoryRetriever,
    MemoryStore,
    join_passages,
)

__all__ = [
    "LangbaseMemoryStore",
    "MemoryPassage",
    "MemoryRetriever",
    "MemoryStore",
    "join_passages",
]
