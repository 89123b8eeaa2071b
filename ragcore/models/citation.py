"""
Citation domain model.

A pointer from an answer back to the chunk that grounded it, rendered
inline as "[doc: name, chunk: id]".

Dependencies: pydantic
System role: Citation data structure
"""

from pydantic import BaseModel, Field


class Citation(BaseModel):
    """Citation model for source attribution."""

    source_name: str = Field(description="Source document name")
    chunk_id: str = Field(description="Chunk identifier for tracing")
    score: float = Field(description="Similarity score of the cited chunk")

    @property
    def marker(self) -> str:
        """Inline citation marker used in prompts and answers."""
        return f"[doc: {self.source_name}, chunk: {self.chunk_id}]"
