"""
Search result models.

SearchResult pairs a chunk with its similarity score (higher is more
relevant on every backend). RetrievalOutcome is the typed result of a
retrieval: results plus an explicit failure kind.

Dependencies: pydantic, ragcore.models.chunk, ragcore.core.exceptions
System role: Retrieval result data structures
"""

from pydantic import BaseModel, Field

from ragcore.core.exceptions import ErrorKind
from ragcore.models.chunk import Chunk


class SearchResult(BaseModel):
    """Single result from vector search."""

    chunk: Chunk = Field(description="Matched chunk (vector may be omitted)")
    score: float = Field(description="Similarity score, higher is more relevant")


def sort_by_score(results: list[SearchResult]) -> list[SearchResult]:
    """Order results score-descending; ties keep chunk_id order for determinism."""
    return sorted(results, key=lambda r: (-r.score, r.chunk.chunk_id))


class RetrievalOutcome(BaseModel):
    """Retrieval results with an explicit failure branch."""

    results: list[SearchResult] = Field(default_factory=list)
    failure: ErrorKind | None = Field(
        default=None,
        description="Set when results are empty because a provider failed",
    )

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def degraded(self) -> bool:
        """True when the empty result means 'no context available', not 'no matches'."""
        return self.failure is not None
