"""
Domain models.

Exports: Chunk, SearchResult, RetrievalOutcome, IngestionRecord,
IngestionStatus, DocumentMetadata, Citation
"""

from ragcore.models.chunk import Chunk, make_chunk_id
from ragcore.models.citation import Citation
from ragcore.models.ingestion import DocumentMetadata, IngestionRecord, IngestionStatus
from ragcore.models.search import RetrievalOutcome, SearchResult, sort_by_score

__all__ = [
    "Chunk",
    "Citation",
    "DocumentMetadata",
    "IngestionRecord",
    "IngestionStatus",
    "RetrievalOutcome",
    "SearchResult",
    "make_chunk_id",
    "sort_by_score",
]
