"""
Test suite for the shared VectorStore contract via InMemoryVectorStore.

Covers validation, batching, idempotent upsert, ranking, deletion and
single initialization under concurrent first use.

System role: Verification of the vector store contract
"""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from conftest import TEST_DIMENSION, unit_vector
from ragcore.boundary.vdb import InMemoryVectorStore
from ragcore.configs import SimilarityMetric
from ragcore.core.exceptions import InvalidArgumentError, ProviderUnavailableError
from ragcore.core.resilience import ResiliencePolicy
from ragcore.models import Chunk


def embedded_chunks(source_id: str, count: int, offset: int = 0) -> list[Chunk]:
    return [
        Chunk.create(f"chunk {i} of {source_id}", source_id, f"{source_id}.txt", i).with_vector(
            unit_vector((i + offset) % TEST_DIMENSION)
        )
        for i in range(count)
    ]


class CountingStore(InMemoryVectorStore):
    """In-memory store that counts schema initializations."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.init_calls = 0

    async def _initialize(self) -> None:
        self.init_calls += 1
        await asyncio.sleep(0.01)


class TestVectorStoreValidation:
    """Test suite for shared argument validation."""

    @pytest.mark.asyncio
    async def test_search_should_reject_non_positive_top_k(self, memory_store: InMemoryVectorStore) -> None:
        """Test top_k <= 0 raises InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError):
            await memory_store.search(unit_vector(0), 0)

    @pytest.mark.asyncio
    async def test_search_should_reject_empty_or_wrong_dimension_vector(
        self, memory_store: InMemoryVectorStore
    ) -> None:
        """Test empty and mismatched query vectors raise InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError):
            await memory_store.search([], 3)
        with pytest.raises(InvalidArgumentError):
            await memory_store.search([1.0, 0.0], 3)

    @pytest.mark.asyncio
    async def test_add_documents_should_reject_chunk_without_vector(
        self, memory_store: InMemoryVectorStore
    ) -> None:
        """Test un-embedded chunks are rejected before any write."""
        chunk = Chunk.create("text", "doc-1", "a.txt", 0)

        with pytest.raises(InvalidArgumentError):
            await memory_store.add_documents([chunk])
        assert len(memory_store) == 0

    @pytest.mark.asyncio
    async def test_delete_should_reject_blank_source_id(self, memory_store: InMemoryVectorStore) -> None:
        """Test blank source id raises InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError):
            await memory_store.delete_by_source_id("  ")

    def test_init_should_reject_unknown_metric(self) -> None:
        """Test unsupported metric names are rejected at construction."""
        with pytest.raises(InvalidArgumentError):
            InMemoryVectorStore(dimension=TEST_DIMENSION, metric="manhattan")

    def test_init_should_accept_metric_name(self) -> None:
        """Test metric may be given by its string value."""
        store = InMemoryVectorStore(dimension=TEST_DIMENSION, metric="euclidean")

        assert store.metric == SimilarityMetric.EUCLIDEAN


class TestVectorStoreWrites:
    """Test suite for upsert and delete."""

    @pytest.mark.asyncio
    async def test_add_documents_should_be_idempotent(self, memory_store: InMemoryVectorStore) -> None:
        """Test adding the same chunks twice does not duplicate them."""
        chunks = embedded_chunks("doc-1", 5)

        await memory_store.add_documents(chunks)
        await memory_store.add_documents(chunks)

        assert len(memory_store) == 5

    @pytest.mark.asyncio
    async def test_add_documents_should_overwrite_by_chunk_id(self, memory_store: InMemoryVectorStore) -> None:
        """Test re-upserting a chunk id replaces its content."""
        original = embedded_chunks("doc-1", 1)[0]
        updated = original.model_copy(update={"content": "new text"})

        await memory_store.add_documents([original])
        await memory_store.add_documents([updated])

        assert memory_store.get(original.chunk_id).content == "new text"

    @pytest.mark.asyncio
    async def test_add_documents_should_write_in_batches(self, memory_store: InMemoryVectorStore) -> None:
        """Test seven chunks with batch size three take three writes."""
        with patch.object(
            memory_store, "_upsert_batch", wraps=memory_store._upsert_batch
        ) as upsert:
            written = await memory_store.add_documents(embedded_chunks("doc-1", 7))

        assert written == 7
        assert [len(call.args[0]) for call in upsert.call_args_list] == [3, 3, 1]

    @pytest.mark.asyncio
    async def test_delete_by_source_id_should_remove_only_that_source(
        self, memory_store: InMemoryVectorStore
    ) -> None:
        """Test deletion is scoped to the given source."""
        await memory_store.add_documents(embedded_chunks("doc-1", 3))
        await memory_store.add_documents(embedded_chunks("doc-10", 2))

        deleted = await memory_store.delete_by_source_id("doc-1")

        assert deleted == 3
        assert len(memory_store) == 2

    @pytest.mark.asyncio
    async def test_delete_by_source_id_should_be_noop_for_unknown_source(
        self, memory_store: InMemoryVectorStore
    ) -> None:
        """Test deleting a source with no chunks succeeds."""
        assert await memory_store.delete_by_source_id("missing") == 0


class TestVectorStoreSearch:
    """Test suite for ranking."""

    @pytest.mark.asyncio
    async def test_search_should_rank_closest_first(self, memory_store: InMemoryVectorStore) -> None:
        """Test exact match scores 1.0 and results are score-descending."""
        await memory_store.add_documents(embedded_chunks("doc-1", 5))

        results = await memory_store.search(unit_vector(2), 3)

        assert results[0].chunk.chunk_id == "doc-1-chunk-2"
        assert results[0].score == pytest.approx(1.0)
        assert [r.score for r in results] == sorted((r.score for r in results), reverse=True)
        assert len(results) == 3

    @pytest.mark.asyncio
    async def test_search_should_return_empty_for_empty_store(self, memory_store: InMemoryVectorStore) -> None:
        """Test searching an empty index returns no results."""
        assert await memory_store.search(unit_vector(0), 3) == []

    @pytest.mark.asyncio
    async def test_search_should_route_through_search_policy(self) -> None:
        """Test provider failures from the policy surface to the caller."""
        policy = AsyncMock(spec=ResiliencePolicy)
        policy.call.side_effect = ProviderUnavailableError("down")
        store = InMemoryVectorStore(dimension=TEST_DIMENSION, search_policy=policy)

        with pytest.raises(ProviderUnavailableError):
            await store.search(unit_vector(0), 3)


class TestEnsureInitialized:
    """Test suite for lazy, single initialization."""

    @pytest.mark.asyncio
    async def test_concurrent_first_use_should_initialize_once(self) -> None:
        """Test concurrent first callers trigger exactly one initialization."""
        store = CountingStore(dimension=TEST_DIMENSION)

        await asyncio.gather(*(store.ensure_initialized() for _ in range(10)))
        await store.search(unit_vector(0), 1)

        assert store.init_calls == 1
