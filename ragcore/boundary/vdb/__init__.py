"""
Vector database layer.

Exports the VectorStore contract, its three backends and the factory.
"""

from ragcore.boundary.vdb.base import VectorStore
from ragcore.boundary.vdb.memory_store import InMemoryVectorStore
from ragcore.boundary.vdb.pgvector_store import PgVectorStore
from ragcore.boundary.vdb.s3_vectors_store import S3VectorsStore
from ragcore.boundary.vdb.scoring import distance_to_score
from ragcore.boundary.vdb.vector_store_factory import get_vector_store

__all__ = [
    "InMemoryVectorStore",
    "PgVectorStore",
    "S3VectorsStore",
    "VectorStore",
    "distance_to_score",
    "get_vector_store",
]
