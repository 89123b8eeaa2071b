"""
Component wiring.

Builds the engine's object graph from Settings once at process start:
one circuit breaker per dependency, the policies that share it, the
embedding client with its query cache, the selected vector store and the
application services.

Dependencies: ragcore.configs, ragcore.core, ragcore.boundary, ragcore.application
System role: Composition root
"""

import logging
from dataclasses import dataclass

from langchain_core.embeddings import Embeddings

from ragcore.application.ingestion_service import IngestionService
from ragcore.application.metadata_store import InMemoryDocumentMetadataStore
from ragcore.application.retrieval_service import RetrievalService
from ragcore.boundary.embeddings import EmbeddingClient, create_embeddings
from ragcore.boundary.vdb import VectorStore, get_vector_store
from ragcore.configs.settings import Settings, get_settings
from ragcore.core.caching import ResultCache
from ragcore.core.chunking import DocumentChunker
from ragcore.core.citation_builder import CitationBuilder
from ragcore.core.exceptions import ConfigurationError
from ragcore.core.resilience import (
    breaker_from_settings,
    embedding_policy,
    index_policy,
    search_policy,
)
from ragcore.observability.metrics import FailureSignals, get_signals

logger = logging.getLogger(__name__)


@dataclass
class Container:
    """Wired engine components."""

    settings: Settings
    chunker: DocumentChunker
    embedding_client: EmbeddingClient
    vector_store: VectorStore
    retrieval_service: RetrievalService
    ingestion_service: IngestionService
    metadata_store: InMemoryDocumentMetadataStore
    citation_builder: CitationBuilder
    cache: ResultCache | None
    signals: FailureSignals

    def close(self) -> None:
        if self.cache is not None:
            self.cache.stop()


def validate_settings(settings: Settings) -> None:
    """
    Reject incompatible component settings before anything is built.

    Raises:
        ConfigurationError: Embedding and vector store dimensions differ
    """
    if settings.embedding.dimension != settings.vector_store.dimension:
        raise ConfigurationError(
            f"Embedding dimension {settings.embedding.dimension} does not match "
            f"vector store dimension {settings.vector_store.dimension}",
            field="dimension",
            details={
                "embedding_dimension": settings.embedding.dimension,
                "vector_store_dimension": settings.vector_store.dimension,
            },
        )


def build_container(
    settings: Settings | None = None,
    embeddings: Embeddings | None = None,
    vector_store: VectorStore | None = None,
    start_cache_sweeper: bool = True,
) -> Container:
    """
    Build all components from settings.

    Args:
        settings: Application settings (get_settings() if None)
        embeddings: LangChain embeddings override (provider from settings if None)
        vector_store: Store override (backend from settings if None)
        start_cache_sweeper: Start the cache's background expiry thread

    Returns:
        Container: Wired components

    Raises:
        ConfigurationError: Incompatible settings
    """
    settings = settings or get_settings()
    validate_settings(settings)
    if vector_store is not None and vector_store.dimension != settings.embedding.dimension:
        raise ConfigurationError(
            f"Vector store dimension {vector_store.dimension} does not match "
            f"embedding dimension {settings.embedding.dimension}",
            field="dimension",
        )

    signals = get_signals()
    resilience = settings.resilience

    cache = None
    if settings.cache.enabled:
        cache = ResultCache.from_settings(settings.cache)
        if start_cache_sweeper:
            cache.start_sweeper()

    embedding_client = EmbeddingClient(
        embeddings=embeddings or create_embeddings(settings.embedding),
        dimension=settings.embedding.dimension,
        policy=embedding_policy(resilience, breaker_from_settings("embedding", resilience)),
        cache=cache,
        batch_size=settings.embedding.batch_size,
        model_name=settings.embedding.model_id,
        signals=signals,
    )

    if vector_store is None:
        store_breaker = breaker_from_settings("vector_store", resilience)
        vector_store = get_vector_store(
            settings,
            search_policy=search_policy(resilience, store_breaker),
            index_policy=index_policy(resilience, store_breaker),
        )

    chunker = DocumentChunker(settings.chunking)
    metadata_store = InMemoryDocumentMetadataStore()

    logger.info(
        f"{__name__}:build_container - Components ready",
        extra={
            "embedding_provider": settings.embedding.provider.value,
            "vector_store_provider": settings.vector_store.provider.value,
            "dimension": settings.embedding.dimension,
        },
    )

    return Container(
        settings=settings,
        chunker=chunker,
        embedding_client=embedding_client,
        vector_store=vector_store,
        retrieval_service=RetrievalService(
            embedding_client,
            vector_store,
            signals=signals,
            default_top_k=settings.vector_store.default_top_k,
        ),
        ingestion_service=IngestionService(
            chunker,
            embedding_client,
            vector_store,
            metadata_store=metadata_store,
            signals=signals,
        ),
        metadata_store=metadata_store,
        citation_builder=CitationBuilder(),
        cache=cache,
        signals=signals,
    )
