"""Shared interface for full-text search indexes."""

from __future__ import annotations

from collections.abc import Hashable
from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable


if TYPE_CHECKING:
    from in_memory_fts.search.models import SearchResult

Id = TypeVar("Id", bound=Hashable, contravariant=True)
Doc = TypeVar("Doc")


@runtime_checkable
class FullTextSearchIndex(Protocol[Id, Doc]):
    """Mutation and query surface every index implementation exposes."""

    def add(self, document: Doc) -> None:  # pragma: no cover - Protocol only
        """Index ``document``, replacing any previous version with the same id."""

    def remove(self, id: Id) -> None:  # pragma: no cover - Protocol only
        """Drop the document with ``id``; unknown ids are ignored."""

    def search(self, search_term: str) -> list[SearchResult[Doc]]:  # pragma: no cover - Protocol only
        """Return documents containing any keyword of ``search_term``."""
