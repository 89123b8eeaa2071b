"""
Test suite for component wiring.

System role: Verification of the composition root
"""

import pytest

from conftest import TEST_DIMENSION, BagOfWordsEmbeddings
from ragcore.boundary.vdb import InMemoryVectorStore
from ragcore.configs import (
    CacheSettings,
    ChunkingSettings,
    EmbeddingSettings,
    Settings,
    VectorStoreProvider,
    VectorStoreSettings,
)
from ragcore.core.exceptions import ConfigurationError
from ragcore.dependencies import build_container, validate_settings
from ragcore.models import IngestionStatus


def memory_settings(embedding_dimension: int = TEST_DIMENSION) -> Settings:
    return Settings(
        chunking=ChunkingSettings(chunk_size_tokens=60, overlap_tokens=10, min_chunk_tokens=0),
        embedding=EmbeddingSettings(dimension=embedding_dimension),
        vector_store=VectorStoreSettings(provider=VectorStoreProvider.MEMORY, dimension=TEST_DIMENSION),
        cache=CacheSettings(max_entries=10),
    )


class TestValidateSettings:
    """Test suite for startup validation."""

    def test_should_reject_dimension_mismatch(self) -> None:
        """Test embedding and vector store dimensions must agree."""
        with pytest.raises(ConfigurationError) as exc_info:
            validate_settings(memory_settings(embedding_dimension=16))

        assert exc_info.value.details["embedding_dimension"] == 16

    def test_build_container_should_reject_mismatched_store_override(self) -> None:
        """Test an injected store of another dimension is rejected."""
        with pytest.raises(ConfigurationError):
            build_container(
                memory_settings(),
                embeddings=BagOfWordsEmbeddings(),
                vector_store=InMemoryVectorStore(dimension=TEST_DIMENSION * 2),
                start_cache_sweeper=False,
            )


class TestBuildContainer:
    """Test suite for the wired memory-backed engine."""

    @pytest.mark.asyncio
    async def test_container_should_ingest_and_retrieve(self) -> None:
        """Test the wired services index a document and find it again."""
        container = build_container(
            memory_settings(),
            embeddings=BagOfWordsEmbeddings(),
            start_cache_sweeper=False,
        )
        try:
            record = await container.ingestion_service.ingest(
                "Glaciers carve valleys over thousands of years.",
                "geo-1",
                "geology.txt",
            )
            results = await container.retrieval_service.retrieve("Glaciers carve valleys")
        finally:
            container.close()

        assert isinstance(container.vector_store, InMemoryVectorStore)
        assert record.status == IngestionStatus.COMPLETED
        assert results[0].chunk.source_id == "geo-1"
        assert container.metadata_store.get_by_id("geo-1").version == 1

    def test_container_should_share_cache_with_embedding_client(self) -> None:
        """Test the query cache is created from settings."""
        container = build_container(
            memory_settings(),
            embeddings=BagOfWordsEmbeddings(),
            start_cache_sweeper=False,
        )

        assert container.cache is not None
        assert container.embedding_client._cache is container.cache
        container.close()
