"""Unit tests for index configuration and environment settings."""

from pydantic import ValidationError
import pytest

from in_memory_fts.config import IndexConfig, Settings
from in_memory_fts.search.analyzers import default_word_filter


@pytest.mark.unit
class TestIndexConfig:
    """IndexConfig holds the strategies an index is built from."""

    def test_defaults(self):
        config = IndexConfig(get_id=id, text_extractor=dict)

        assert config.word_filter is default_word_filter
        assert config.rank is None

    def test_rejects_non_callables(self):
        with pytest.raises(ValidationError):
            IndexConfig(get_id=id, text_extractor="title")

    def test_is_frozen(self):
        config = IndexConfig(get_id=id, text_extractor=dict)

        with pytest.raises(ValidationError):
            config.rank = len


@pytest.mark.unit
class TestSettings:
    """Settings read FTS_* environment variables."""

    def test_defaults(self):
        settings = Settings()

        assert settings.min_word_length == 4
        assert settings.log_level == "info"
        assert settings.log_json is True
        assert settings.word_filter() is default_word_filter

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("FTS_MIN_WORD_LENGTH", "2")
        monkeypatch.setenv("FTS_LOG_JSON", "false")

        settings = Settings()

        assert settings.min_word_length == 2
        assert settings.log_json is False
        assert settings.word_filter()("ab") is True
        assert settings.word_filter()("a") is False

    def test_rejects_non_positive_length(self):
        with pytest.raises(ValidationError):
            Settings(min_word_length=0)
