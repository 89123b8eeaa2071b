"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.

Dependencies: All config modules
System role: Central configuration aggregator for the engine
"""

from functools import lru_cache

from pydantic import Field

from ragcore.configs.base import BaseSettings
from ragcore.configs.cache import CacheSettings
from ragcore.configs.chunking import ChunkingSettings
from ragcore.configs.embedding import EmbeddingSettings
from ragcore.configs.resilience import ResilienceSettings
from ragcore.configs.vector_store import (
    PgVectorSettings,
    S3VectorsSettings,
    VectorStoreSettings,
)


class Settings(BaseSettings):
    """Unified settings aggregating all config modules."""

    chunking: ChunkingSettings = Field(default_factory=ChunkingSettings)
    embedding: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    vector_store: VectorStoreSettings = Field(default_factory=VectorStoreSettings)
    s3_vectors: S3VectorsSettings = Field(default_factory=S3VectorsSettings)
    pgvector: PgVectorSettings = Field(default_factory=PgVectorSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    resilience: ResilienceSettings = Field(default_factory=ResilienceSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get settings singleton.

    Environment variables and .env are read once at startup.

    Returns:
        Settings: Settings instance

    Usage:
        from ragcore.configs import get_settings
        settings = get_settings()
    """
    return Settings()
