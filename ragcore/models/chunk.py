"""
Chunk domain model.

Represents a bounded slice of a source document with a deterministic ID
and an optional embedding vector.

Dependencies: pydantic
System role: Document chunk data structure
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


def make_chunk_id(source_id: str, chunk_index: int) -> str:
    """Deterministic chunk identifier: re-ingesting a source upserts in place."""
    return f"{source_id}-chunk-{chunk_index}"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Chunk(BaseModel):
    """Document chunk with optional embedding vector."""

    chunk_id: str = Field(description="Deterministic chunk identifier ({source_id}-chunk-{index})")
    chunk_index: int = Field(ge=0, description="Position of the chunk in its source")
    content: str = Field(description="Chunk text content")
    vector: list[float] = Field(
        default_factory=list,
        description="Embedding vector (empty until embedded)",
    )
    source_id: str = Field(description="Source document identifier")
    source_name: str = Field(description="Source document name (e.g. filename)")
    indexed_at: datetime = Field(default_factory=utc_now, description="Chunk creation time (UTC)")

    @classmethod
    def create(
        cls,
        content: str,
        source_id: str,
        source_name: str,
        chunk_index: int,
        indexed_at: datetime | None = None,
    ) -> "Chunk":
        """Build an un-embedded chunk with its deterministic ID."""
        return cls(
            chunk_id=make_chunk_id(source_id, chunk_index),
            chunk_index=chunk_index,
            content=content,
            source_id=source_id,
            source_name=source_name,
            indexed_at=indexed_at or utc_now(),
        )

    @property
    def is_embedded(self) -> bool:
        return len(self.vector) > 0

    def with_vector(self, vector: list[float]) -> "Chunk":
        """Return a copy with the embedding populated."""
        return self.model_copy(update={"vector": list(vector)})
