"""Application layer: ingestion and retrieval orchestration."""

from ragcore.application.ingestion_service import IngestionService
from ragcore.application.metadata_store import InMemoryDocumentMetadataStore
from ragcore.application.retrieval_service import RetrievalService

__all__ = [
    "IngestionService",
    "InMemoryDocumentMetadataStore",
    "RetrievalService",
]
