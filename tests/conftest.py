"""Shared test fixtures and configuration."""

import os
from pathlib import Path
import sys

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from in_memory_fts.search.memory_index import InMemoryFullTextSearchIndex
from tests.fixtures.articles import SAMPLE_ARTICLES, article_fields, article_id


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Drop FTS_* variables so Settings only sees what a test sets."""
    for key in [name for name in os.environ if name.upper().startswith("FTS_")]:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def article_index():
    """Index over articles with the default word filter and no ranking."""
    return InMemoryFullTextSearchIndex(article_id, article_fields)


@pytest.fixture
def ranked_index():
    """Index over articles ordered by their ``rank`` attribute."""
    return InMemoryFullTextSearchIndex(
        article_id,
        article_fields,
        rank=lambda result: result.document.rank,
    )


@pytest.fixture
def populated_index(article_index):
    """Default index holding the sample articles."""
    for article in SAMPLE_ARTICLES:
        article_index.add(article)
    return article_index
