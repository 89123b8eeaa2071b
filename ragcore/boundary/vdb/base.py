"""
Vector store contract.

Both production backends and the in-memory store share this base: input
validation, batching, lazy schema creation under a per-store lock, and
routing of provider I/O through the resilience policies. Subclasses only
implement the four provider primitives.

Dependencies: ragcore.models, ragcore.core.resilience, asyncio
System role: Backend-independent vector store interface
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Sequence

from ragcore.configs.vector_store import SimilarityMetric
from ragcore.core.exceptions import InvalidArgumentError
from ragcore.core.resilience import ResiliencePolicy
from ragcore.models.chunk import Chunk
from ragcore.models.search import SearchResult, sort_by_score
from ragcore.observability.log_utils import short_hash

logger = logging.getLogger(__name__)


class VectorStore(ABC):
    """Upsert, search and delete chunks by vector similarity."""

    provider_name = "vector_store"
    max_batch_size = 500

    def __init__(
        self,
        dimension: int,
        metric: SimilarityMetric | str = SimilarityMetric.COSINE,
        batch_size: int = 100,
        search_policy: ResiliencePolicy | None = None,
        index_policy: ResiliencePolicy | None = None,
    ) -> None:
        """
        Initialize shared store state.

        Args:
            dimension: Vector dimension accepted by the index
            metric: cosine, dot_product or euclidean
            batch_size: Chunks per write request
            search_policy: Policy for queries and deletes
            index_policy: Policy for schema creation and upserts

        Raises:
            InvalidArgumentError: Non-positive dimension or batch size, unknown metric
        """
        if dimension <= 0:
            raise InvalidArgumentError("dimension must be positive", field="dimension")
        if batch_size <= 0:
            raise InvalidArgumentError("batch_size must be positive", field="batch_size")
        try:
            self._metric = SimilarityMetric(metric)
        except ValueError as e:
            raise InvalidArgumentError(
                f"Unsupported similarity metric: {metric}",
                field="metric",
            ) from e

        self._dimension = dimension
        self._batch_size = min(batch_size, self.max_batch_size)
        self._search_policy = search_policy
        self._index_policy = index_policy
        self._init_lock = asyncio.Lock()
        self._initialized = False

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def metric(self) -> SimilarityMetric:
        return self._metric

    @property
    def batch_size(self) -> int:
        return self._batch_size

    async def ensure_initialized(self) -> None:
        """Create the index or schema once; concurrent first calls create it once."""
        if self._initialized:
            return
        async with self._init_lock:
            if self._initialized:
                return
            await self._run(self._index_policy, self._initialize)
            self._initialized = True
            logger.info(
                f"{__name__}:ensure_initialized - {self.provider_name} ready",
                extra={"dimension": self._dimension, "metric": self._metric.value},
            )

    async def add_documents(self, chunks: Sequence[Chunk]) -> int:
        """
        Upsert embedded chunks keyed by chunk_id.

        Args:
            chunks: Chunks with vectors of the store dimension

        Returns:
            int: Number of chunks written

        Raises:
            InvalidArgumentError: Chunk without vector or with the wrong dimension
            ProviderUnavailableError: Backend unreachable after retries
        """
        if not chunks:
            return 0
        for chunk in chunks:
            if not chunk.chunk_id or not chunk.chunk_id.strip():
                raise InvalidArgumentError("chunk_id cannot be empty", field="chunk_id")
            if not chunk.is_embedded:
                raise InvalidArgumentError(
                    f"Chunk {chunk.chunk_id} has no vector",
                    field="vector",
                )
            self._check_dimension(chunk.vector, field="vector")

        await self.ensure_initialized()

        batches = 0
        for start in range(0, len(chunks), self._batch_size):
            batch = list(chunks[start:start + self._batch_size])
            await self._run(self._index_policy, self._upsert_batch, batch)
            batches += 1

        logger.info(
            f"{__name__}:add_documents - Upserted {len(chunks)} chunks in {batches} batches",
            extra={"provider": self.provider_name},
        )
        return len(chunks)

    async def search(self, query_vector: Sequence[float], top_k: int) -> list[SearchResult]:
        """
        Return the top_k most similar chunks, highest score first.

        Raises:
            InvalidArgumentError: top_k <= 0, empty or wrong-dimension query vector
            ProviderUnavailableError: Backend unreachable after retries
        """
        if top_k <= 0:
            raise InvalidArgumentError("top_k must be positive", field="top_k")
        if not query_vector:
            raise InvalidArgumentError("query_vector cannot be empty", field="query_vector")
        self._check_dimension(query_vector, field="query_vector")

        await self.ensure_initialized()

        results = await self._run(self._search_policy, self._query, list(query_vector), top_k)
        ranked = sort_by_score(results)[:top_k]
        logger.info(
            f"{__name__}:search - {len(ranked)} results",
            extra={
                "provider": self.provider_name,
                "top_k": top_k,
                "chunks": [short_hash(r.chunk.chunk_id) for r in ranked],
            },
        )
        return ranked

    async def delete_by_source_id(self, source_id: str) -> int:
        """
        Remove every chunk of a source. Deleting an unknown source is a no-op.

        Returns:
            int: Number of chunks removed
        """
        if not source_id or not source_id.strip():
            raise InvalidArgumentError("source_id cannot be empty", field="source_id")

        await self.ensure_initialized()

        deleted = await self._run(self._search_policy, self._delete_source, source_id)
        logger.info(
            f"{__name__}:delete_by_source_id - Deleted {deleted} chunks",
            extra={"provider": self.provider_name, "source_id": source_id},
        )
        return deleted

    def _check_dimension(self, vector: Sequence[float], field: str) -> None:
        if len(vector) != self._dimension:
            raise InvalidArgumentError(
                f"Vector dimension {len(vector)} does not match index dimension {self._dimension}",
                field=field,
                details={"expected": self._dimension, "actual": len(vector)},
            )

    async def _run(
        self,
        policy: ResiliencePolicy | None,
        fn: Callable[..., Awaitable[Any]],
        *args: Any,
    ) -> Any:
        if policy is None:
            return await fn(*args)
        return await policy.call(fn, *args)

    @abstractmethod
    async def _initialize(self) -> None:
        """Create index/schema if missing. Must tolerate 'already exists'."""

    @abstractmethod
    async def _upsert_batch(self, chunks: list[Chunk]) -> None:
        """Write one batch; existing chunk_ids are overwritten."""

    @abstractmethod
    async def _query(self, query_vector: list[float], top_k: int) -> list[SearchResult]:
        """Nearest neighbours with similarity scores."""

    @abstractmethod
    async def _delete_source(self, source_id: str) -> int:
        """Delete all chunks with source_id; returns the count removed."""
