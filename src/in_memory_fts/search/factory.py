"""Index construction from environment-driven settings."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Mapping
from typing import Any

from opentelemetry.trace import Tracer

from in_memory_fts.config import Settings
from in_memory_fts.search.analyzers import WordFilterFn
from in_memory_fts.search.memory_index import InMemoryFullTextSearchIndex
from in_memory_fts.search.models import SearchResult


def create_index(
    get_id: Callable[[Any], Hashable],
    text_extractor: Callable[[Any], Mapping[str, str | None]],
    *,
    word_filter: WordFilterFn | None = None,
    rank: Callable[[SearchResult], Any] | None = None,
    settings: Settings | None = None,
    tracer: Tracer | None = None,
) -> InMemoryFullTextSearchIndex:
    """Create an in-memory index.

    An explicit ``word_filter`` wins; otherwise the minimum word length comes
    from ``settings`` (loaded from ``FTS_*`` environment variables when not
    given).
    """
    if word_filter is None:
        word_filter = (settings or Settings()).word_filter()
    return InMemoryFullTextSearchIndex(get_id, text_extractor, word_filter, rank, tracer=tracer)
