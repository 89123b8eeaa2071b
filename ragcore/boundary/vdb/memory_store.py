"""
In-memory vector store for local development and tests.

Brute-force scoring over a dict keyed by chunk_id, with the same
contract and score mapping as the production backends.

Dependencies: ragcore.boundary.vdb.base, ragcore.boundary.vdb.scoring
System role: Local vector store (no external services)
"""

import logging

from ragcore.boundary.vdb.base import VectorStore
from ragcore.boundary.vdb.scoring import distance, distance_to_score
from ragcore.models.chunk import Chunk
from ragcore.models.search import SearchResult

logger = logging.getLogger(__name__)


class InMemoryVectorStore(VectorStore):
    """Dict-backed vector store."""

    provider_name = "memory"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._chunks: dict[str, Chunk] = {}

    def __len__(self) -> int:
        return len(self._chunks)

    def get(self, chunk_id: str) -> Chunk | None:
        return self._chunks.get(chunk_id)

    async def _initialize(self) -> None:
        logger.debug(f"{__name__}:_initialize - Using in-memory index")

    async def _upsert_batch(self, chunks: list[Chunk]) -> None:
        for chunk in chunks:
            self._chunks[chunk.chunk_id] = chunk

    async def _query(self, query_vector: list[float], top_k: int) -> list[SearchResult]:
        scored = [
            SearchResult(
                chunk=chunk,
                score=distance_to_score(self.metric, distance(self.metric, query_vector, chunk.vector)),
            )
            for chunk in self._chunks.values()
        ]
        scored.sort(key=lambda r: (-r.score, r.chunk.chunk_id))
        return scored[:top_k]

    async def _delete_source(self, source_id: str) -> int:
        doomed = [cid for cid, chunk in self._chunks.items() if chunk.source_id == source_id]
        for chunk_id in doomed:
            del self._chunks[chunk_id]
        return len(doomed)
