"""In-memory full-text search index.

The index keeps two maps that always describe the same data:

- a forward map ``id -> {field -> keywords}`` recording what each document
  contains, with character ranges, and
- an inverted map ``word -> {id -> document}`` recording which documents
  contain each word.

Both maps are private and only mutated by :meth:`add` and :meth:`remove`, which
update them together. A word's bucket in the inverted map is deleted as soon
as no document contains the word any more.

The index is not thread-safe; callers sharing one instance across threads
must serialize access themselves.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Mapping
import logging
from types import MappingProxyType
from typing import Any, Generic, TypeVar

from opentelemetry.trace import Tracer

from in_memory_fts.config import IndexConfig
from in_memory_fts.observability.tracing import create_span
from in_memory_fts.search.analyzers import KeywordAnalyzer, WordFilterFn, default_word_filter
from in_memory_fts.search.models import Keyword, SearchResult


logger = logging.getLogger(__name__)

Id = TypeVar("Id", bound=Hashable)
Doc = TypeVar("Doc")

KeywordsByField = Mapping[str, frozenset[Keyword]]


def _words(keywords_by_field: KeywordsByField) -> set[str]:
    return {keyword.word for keywords in keywords_by_field.values() for keyword in keywords}


class InMemoryFullTextSearchIndex(Generic[Id, Doc]):
    """Primitive full-text search index held entirely in memory.

    Args:
        get_id: Extracts a stable identity; equal ids are the same document.
        text_extractor: Returns the indexable text of each field. Fields
            mapped to ``None`` or an empty string are kept with no keywords.
        word_filter: Decides which tokens get indexed and searched. Receives
            the token in its original case. Defaults to "longer than three
            characters".
        rank: Optional key function; when given, search results are sorted
            by it in descending order.
        tracer: OpenTelemetry tracer for operation spans. Defaults to the
            globally configured one.

    All callables must be pure: the index relies on ``get_id`` returning the
    same id for a document every time it is asked.
    """

    def __init__(
        self,
        get_id: Callable[[Doc], Id],
        text_extractor: Callable[[Doc], Mapping[str, str | None]],
        word_filter: WordFilterFn = default_word_filter,
        rank: Callable[[SearchResult[Doc]], Any] | None = None,
        *,
        tracer: Tracer | None = None,
    ) -> None:
        self._config = IndexConfig(
            get_id=get_id,
            text_extractor=text_extractor,
            word_filter=word_filter,
            rank=rank,
        )
        self._analyzer = KeywordAnalyzer(self._config.word_filter)
        self._tracer = tracer
        self._keywords: dict[Id, dict[str, frozenset[Keyword]]] = {}
        self._index: dict[str, dict[Id, Doc]] = {}

    @classmethod
    def from_config(cls, config: IndexConfig, *, tracer: Tracer | None = None) -> InMemoryFullTextSearchIndex:
        return cls(
            config.get_id,
            config.text_extractor,
            config.word_filter,
            config.rank,
            tracer=tracer,
        )

    @property
    def config(self) -> IndexConfig:
        return self._config

    def add(self, document: Doc) -> None:
        """Index ``document``, fully replacing any earlier version with the same id."""
        with create_span("fts.add", tracer=self._tracer) as span:
            # Run every caller-supplied function before touching either map.
            doc_id = self._config.get_id(document)
            new_keywords_map = self._keywords_map(self._config.text_extractor(document))

            existing_words = _words(self._keywords.get(doc_id, {}))
            new_words = _words(new_keywords_map)

            for word in new_words:
                self._add_to_index(doc_id, document, word)
            for word in existing_words - new_words:
                self._remove_from_index(doc_id, word)

            self._keywords[doc_id] = new_keywords_map

            span.set_attribute("fts.words.added", len(new_words - existing_words))
            span.set_attribute("fts.words.removed", len(existing_words - new_words))
            logger.debug(
                "Indexed document",
                extra={
                    "doc_id": repr(doc_id),
                    "fields": len(new_keywords_map),
                    "words_added": len(new_words - existing_words),
                    "words_removed": len(existing_words - new_words),
                },
            )

    def remove(self, id: Id) -> None:
        """Drop the document with ``id``; unknown ids are ignored."""
        with create_span("fts.remove", tracer=self._tracer) as span:
            keywords_map = self._keywords.pop(id, None)
            if keywords_map is None:
                span.set_attribute("fts.removed", False)
                return

            words = _words(keywords_map)
            for word in words:
                self._remove_from_index(id, word)

            span.set_attribute("fts.removed", True)
            logger.debug("Removed document", extra={"doc_id": repr(id), "words_removed": len(words)})

    def search(self, search_term: str) -> list[SearchResult[Doc]]:
        """Return every document containing at least one keyword of ``search_term``.

        Each result carries, for every field of the document, the keywords
        that matched (an empty set for fields without a match). A term that
        yields no keywords returns no results.
        """
        with create_span("fts.search", tracer=self._tracer) as span:
            query_keywords = sorted(self._analyzer(search_term), key=lambda keyword: keyword.start)
            search_words: set[str] = set()
            found: dict[Id, Doc] = {}
            # Buckets are visited in query order so result order is reproducible.
            for word in dict.fromkeys(keyword.word for keyword in query_keywords):
                search_words.add(word)
                for doc_id, document in self._index.get(word, {}).items():
                    found.setdefault(doc_id, document)

            results = [
                SearchResult(document=document, matches=self._matches(self._keywords[doc_id], search_words))
                for doc_id, document in found.items()
            ]
            if self._config.rank is not None:
                results.sort(key=self._config.rank, reverse=True)

            span.set_attribute("fts.query.words", len(search_words))
            span.set_attribute("fts.results", len(results))
            logger.debug("Search finished", extra={"query_words": len(search_words), "results": len(results)})
            return results

    def extract_keywords(self, text: str | None) -> frozenset[Keyword]:
        """Tokenize ``text`` with the same rule used for indexing and queries."""
        return self._analyzer(text)

    def keywords_of(self, id: Id) -> Mapping[str, frozenset[Keyword]]:
        """Read-only view of the keywords indexed for ``id``, per field."""
        return MappingProxyType(self._keywords.get(id, {}))

    def documents_for(self, word: str) -> Mapping[Id, Doc]:
        """Read-only view of the documents whose text contains ``word``."""
        return MappingProxyType(self._index.get(word, {}))

    @property
    def indexed_words(self) -> frozenset[str]:
        return frozenset(self._index)

    def __len__(self) -> int:
        return len(self._keywords)

    def __contains__(self, id: object) -> bool:
        return id in self._keywords

    def _keywords_map(self, data: Mapping[str, str | None]) -> dict[str, frozenset[Keyword]]:
        return {field: self._analyzer(text) for field, text in data.items()}

    def _add_to_index(self, doc_id: Id, document: Doc, word: str) -> None:
        self._index.setdefault(word, {})[doc_id] = document

    def _remove_from_index(self, doc_id: Id, word: str) -> None:
        documents = self._index.get(word)
        if documents is None:
            return
        documents.pop(doc_id, None)
        if not documents:
            del self._index[word]

    @staticmethod
    def _matches(keywords_map: KeywordsByField, search_words: set[str]) -> dict[str, frozenset[Keyword]]:
        return {
            field: frozenset(keyword for keyword in keywords if keyword.word in search_words)
            for field, keywords in keywords_map.items()
        }
