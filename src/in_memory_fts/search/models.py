"""Search data models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Generic, TypeVar


Doc = TypeVar("Doc")


@dataclass(frozen=True, order=True)
class Keyword:
    """A normalized word occurrence within a field.

    ``start`` and ``end`` delimit the half-open character range ``[start, end)``
    of the occurrence in the original field text. Two keywords are equal only
    when both the word and the range match, so repeated words stay distinct.
    """

    word: str
    start: int
    end: int

    @property
    def range(self) -> range:
        return range(self.start, self.end)


@dataclass(frozen=True)
class SearchResult(Generic[Doc]):
    """A matched document plus the keywords that matched, per field.

    Every field indexed for the document appears in ``matches``; fields
    without a hit map to an empty set.
    """

    document: Doc
    matches: Mapping[str, frozenset[Keyword]] = field(default_factory=dict)

    @property
    def match_count(self) -> int:
        return sum(len(keywords) for keywords in self.matches.values())

    @property
    def matched_fields(self) -> list[str]:
        return [name for name, keywords in self.matches.items() if keywords]
