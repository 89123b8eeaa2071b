"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules support environment variable mapping with validation.
"""

from ragcore.configs.cache import CacheSettings
from ragcore.configs.chunking import ChunkingSettings, SentenceSplitMode, TokenizerMode
from ragcore.configs.embedding import EmbeddingProvider, EmbeddingSettings
from ragcore.configs.resilience import ResilienceSettings
from ragcore.configs.settings import Settings, get_settings
from ragcore.configs.vector_store import (
    PgVectorSettings,
    S3VectorsSettings,
    SimilarityMetric,
    VectorStoreProvider,
    VectorStoreSettings,
)

__all__ = [
    "CacheSettings",
    "ChunkingSettings",
    "EmbeddingProvider",
    "EmbeddingSettings",
    "PgVectorSettings",
    "ResilienceSettings",
    "S3VectorsSettings",
    "SentenceSplitMode",
    "Settings",
    "SimilarityMetric",
    "TokenizerMode",
    "VectorStoreProvider",
    "VectorStoreSettings",
    "get_settings",
]
