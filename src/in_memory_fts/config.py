"""Configuration for in-memory-fts using Pydantic models and Settings."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from in_memory_fts.search.analyzers import WordFilterFn, default_word_filter, min_length_filter


class IndexConfig(BaseModel):
    """Strategies an index is built from, validated once at construction.

    All four callables must be pure and stable: the index assumes that
    ``get_id`` returns the same id for the same document on every call and
    that ``text_extractor``, ``word_filter`` and ``rank`` have no side effects.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    get_id: Callable[[Any], Hashable]
    text_extractor: Callable[[Any], Mapping[str, str | None]]
    word_filter: Callable[[str], bool] = Field(default=default_word_filter)
    rank: Callable[[Any], Any] | None = Field(default=None)


class Settings(BaseSettings):
    """Environment-driven defaults for index construction and logging."""

    model_config = SettingsConfigDict(
        env_prefix="FTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    min_word_length: int = Field(default=4, ge=1, description="Shortest token length that gets indexed")

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")

    service_name: str = Field(default="in-memory-fts", description="Service name reported on traces")

    def word_filter(self) -> WordFilterFn:
        if self.min_word_length == 4:
            return default_word_filter
        return min_length_filter(self.min_word_length)
