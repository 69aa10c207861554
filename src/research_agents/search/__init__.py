"""Web search fan-out."""

from research_agents.search.aggregator import (
    LangbaseWebSearch,
    SearchAggregator,
    SearchProvider,
    SearchQuery,
    SearchResult,
    flatten,
)

__all__ = [
    "LangbaseWebSearch",
    "SearchAggregator",
    "SearchProvider",
    "SearchQuery",
    "SearchResult",
    "flatten",
]
