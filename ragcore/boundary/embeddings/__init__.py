"""Embedding providers and the resilient embedding client."""

from ragcore.boundary.embeddings.embedding_client import EmbeddingClient
from ragcore.boundary.embeddings.embedding_factory import create_embeddings

__all__ = ["EmbeddingClient", "create_embeddings"]
