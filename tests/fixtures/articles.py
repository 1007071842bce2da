"""Sample documents shared by the index tests."""

from dataclasses import dataclass


@dataclass
class Article:
    """Document type used throughout the tests."""

    id: int
    title: str | None = None
    body: str | None = None
    rank: int = 0


def article_id(article: Article) -> int:
    return article.id


def article_fields(article: Article) -> dict[str, str | None]:
    return {"title": article.title, "body": article.body}


SAMPLE_ARTICLES = [
    Article(id=1, title="Python packaging guide", body="Build wheels with setuptools", rank=2),
    Article(id=2, title="Search engines", body="Inverted indexes map words to documents", rank=5),
    Article(id=3, title="Python search tricks", body="Use an index for fast lookups", rank=1),
]
