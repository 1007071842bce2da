"""Analyzer utilities for the in-memory index.

Indexing and querying share one analyzer so that a query token and an
indexed token are produced by exactly the same rule. The analyzer is a
composable tokenizer/filter pipeline whose final output is a set of
:class:`~in_memory_fts.search.models.Keyword` values.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass, replace
import re
from typing import Protocol

from in_memory_fts.search.models import Keyword


WordFilterFn = Callable[[str], bool]

# Runs of word characters and dots; a dot directly followed by whitespace ends the run.
KEYWORD_PATTERN = r"(?:(?!\.\s)[\w.])+"

DEFAULT_MIN_WORD_LENGTH = 4


@dataclass
class Token:
    """Represents a token emitted by analyzers."""

    text: str
    start_char: int
    end_char: int

    def copy_with(self, **updates: object) -> Token:
        return replace(self, **updates)  # type: ignore[arg-type]

    def to_keyword(self) -> Keyword:
        return Keyword(word=self.text, start=self.start_char, end=self.end_char)


class Tokenizer(Protocol):
    """Protocol implemented by tokenizers."""

    def __call__(self, text: str) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class TokenFilter(Protocol):
    """Protocol implemented by token filters."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class RegexTokenizer:
    """Regex-based tokenizer that yields word tokens with character offsets."""

    def __init__(self, pattern: str = KEYWORD_PATTERN, flags: int = re.UNICODE | re.IGNORECASE) -> None:
        self.pattern = re.compile(pattern, flags)

    def __call__(self, text: str) -> Iterator[Token]:
        for match in self.pattern.finditer(text):
            yield Token(
                text=match.group(0),
                start_char=match.start(),
                end_char=match.end(),
            )


class WordFilter:
    """Keeps only tokens accepted by a caller-supplied predicate.

    The predicate sees the token as it appears in the source text, so it has
    to run before any normalizing filter.
    """

    def __init__(self, predicate: WordFilterFn) -> None:
        self.predicate = predicate

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if self.predicate(token.text):
                yield token


class LowercaseFilter:
    """Filter that lowercases token text."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if token.text.islower():
                yield token
            else:
                yield token.copy_with(text=token.text.lower())


class AnalyzerPipeline:
    """Composable analyzer pipeline (tokenizer + filters)."""

    def __init__(self, tokenizer: Tokenizer, filters: Sequence[TokenFilter] | None = None) -> None:
        self.tokenizer = tokenizer
        self.filters = list(filters or [])

    def __call__(self, text: str) -> list[Token]:
        stream: Iterable[Token] = self.tokenizer(text)
        for token_filter in self.filters:
            stream = token_filter(stream)
        return list(stream)


def default_word_filter(word: str) -> bool:
    """Accept words longer than three characters."""
    return len(word) >= DEFAULT_MIN_WORD_LENGTH


def min_length_filter(min_length: int) -> WordFilterFn:
    """Return a predicate accepting words of at least ``min_length`` characters."""
    if min_length < 1:
        msg = f"min_length must be positive, got {min_length}"
        raise ValueError(msg)

    def accept(word: str) -> bool:
        return len(word) >= min_length

    return accept


class KeywordAnalyzer:
    """Turns free text into the set of keywords used by the index."""

    def __init__(self, word_filter: WordFilterFn = default_word_filter) -> None:
        self.pipeline = AnalyzerPipeline(RegexTokenizer(), [WordFilter(word_filter), LowercaseFilter()])

    def __call__(self, text: str | None) -> frozenset[Keyword]:
        if not text:
            return frozenset()
        return frozenset(token.to_keyword() for token in self.pipeline(text))


def extract_keywords(text: str | None, word_filter: WordFilterFn = default_word_filter) -> frozenset[Keyword]:
    """Tokenize ``text`` into keywords using a one-off analyzer."""
    return KeywordAnalyzer(word_filter)(text)
