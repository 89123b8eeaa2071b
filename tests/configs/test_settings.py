"""
Test suite for configuration settings.

Verifies defaults, environment variable prefixes and validators.

System role: Verification of configuration loading
"""

import pytest
from pydantic import ValidationError
from sqlalchemy.engine import make_url

from ragcore.configs import (
    CacheSettings,
    ChunkingSettings,
    EmbeddingProvider,
    EmbeddingSettings,
    PgVectorSettings,
    ResilienceSettings,
    Settings,
    SimilarityMetric,
    TokenizerMode,
    VectorStoreProvider,
    VectorStoreSettings,
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Run each test from an empty directory so no .env file is read."""
    monkeypatch.chdir(tmp_path)


class TestDefaults:
    """Test suite for default values."""

    def test_settings_should_have_production_defaults(self) -> None:
        """Test defaults match the documented deployment values."""
        settings = Settings()

        assert settings.chunking.chunk_size_tokens == 800
        assert settings.chunking.overlap_tokens == 100
        assert settings.chunking.min_chunk_tokens == 50
        assert settings.chunking.tokenizer_mode == TokenizerMode.APPROXIMATE
        assert settings.embedding.provider == EmbeddingProvider.BEDROCK
        assert settings.embedding.dimension == 1024
        assert settings.vector_store.provider == VectorStoreProvider.S3
        assert settings.vector_store.similarity_metric == SimilarityMetric.COSINE
        assert settings.vector_store.default_top_k == 3
        assert settings.cache.max_entries == 100
        assert settings.cache.default_ttl_seconds == 3600.0

    def test_resilience_should_be_stricter_for_search(self) -> None:
        """Test search budget is tighter than the embedding budget."""
        resilience = ResilienceSettings()

        assert resilience.search_timeout_seconds < resilience.embedding_timeout_seconds
        assert resilience.search_max_attempts < resilience.embedding_max_attempts


class TestEnvironment:
    """Test suite for environment variable mapping."""

    def test_env_prefixes_should_apply_per_section(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test each section reads its own prefixed variables."""
        monkeypatch.setenv("CHUNKING_CHUNK_SIZE_TOKENS", "400")
        monkeypatch.setenv("EMBEDDING_PROVIDER", "google")
        monkeypatch.setenv("VECTOR_STORE_PROVIDER", "pgvector")
        monkeypatch.setenv("VECTOR_STORE_SIMILARITY_METRIC", "euclidean")
        monkeypatch.setenv("CACHE_MAX_ENTRIES", "10")
        monkeypatch.setenv("RESILIENCE_SEARCH_MAX_ATTEMPTS", "2")

        assert ChunkingSettings().chunk_size_tokens == 400
        assert EmbeddingSettings().provider == EmbeddingProvider.GOOGLE
        assert VectorStoreSettings().provider == VectorStoreProvider.PGVECTOR
        assert VectorStoreSettings().similarity_metric == SimilarityMetric.EUCLIDEAN
        assert CacheSettings().max_entries == 10
        assert ResilienceSettings().search_max_attempts == 2

    def test_pgvector_password_should_be_secret(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the password is read from env and hidden from repr."""
        monkeypatch.setenv("PGVECTOR_PASSWORD", "s3cret")

        settings = PgVectorSettings()

        assert "s3cret" not in repr(settings)
        assert settings.password.get_secret_value() == "s3cret"


class TestValidators:
    """Test suite for validation rules."""

    def test_overlap_should_be_smaller_than_chunk_size(self) -> None:
        """Test overlap >= chunk size is rejected."""
        with pytest.raises(ValidationError):
            ChunkingSettings(chunk_size_tokens=100, overlap_tokens=100)

    def test_table_name_should_be_plain_identifier(self) -> None:
        """Test table names with SQL syntax are rejected."""
        with pytest.raises(ValidationError):
            PgVectorSettings(table_name="chunks; DROP TABLE users")

    def test_batch_size_should_be_capped(self) -> None:
        """Test batch sizes above 500 are rejected."""
        with pytest.raises(ValidationError):
            VectorStoreSettings(batch_size=501)

    def test_async_database_url_should_use_asyncpg(self) -> None:
        """Test URL scheme, credentials and ssl parameter."""
        settings = PgVectorSettings(
            host="db.internal",
            user="rag",
            password="pw",
            database="vectors",
            sslmode="require",
        )

        rendered = settings.async_database_url.render_as_string(hide_password=False)
        assert rendered == "postgresql+asyncpg://rag:pw@db.internal:5432/vectors?ssl=require"

    def test_async_database_url_should_escape_password(self) -> None:
        """Test a password with URL delimiters keeps host and credentials intact."""
        settings = PgVectorSettings(host="db.internal", password="p@ss/w#rd:1")

        url = settings.async_database_url
        reparsed = make_url(url.render_as_string(hide_password=False))

        assert url.host == "db.internal"
        assert reparsed.host == "db.internal"
        assert reparsed.password == "p@ss/w#rd:1"
        assert reparsed.database == "ragcore"
        assert not url.query
