"""
Vector store factory for selecting between S3 Vectors, pgvector and memory.

The backend is read once from VECTOR_STORE_PROVIDER at process start and
never switched at runtime. Every backend exposes the same VectorStore
contract.

Dependencies: ragcore.boundary.vdb, ragcore.boundary.db, ragcore.configs
System role: Vector store instantiation and selection
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine

from ragcore.boundary.db.connection import get_async_engine
from ragcore.boundary.vdb.base import VectorStore
from ragcore.boundary.vdb.memory_store import InMemoryVectorStore
from ragcore.boundary.vdb.pgvector_store import PgVectorStore
from ragcore.boundary.vdb.s3_vectors_store import S3VectorsStore
from ragcore.configs.settings import Settings, get_settings
from ragcore.configs.vector_store import VectorStoreProvider
from ragcore.core.exceptions import ConfigurationError
from ragcore.core.resilience import ResiliencePolicy

logger = logging.getLogger(__name__)


def get_vector_store(
    settings: Settings | None = None,
    search_policy: ResiliencePolicy | None = None,
    index_policy: ResiliencePolicy | None = None,
    engine: AsyncEngine | None = None,
    s3_client: Any | None = None,
) -> VectorStore:
    """
    Build the configured vector store.

    Args:
        settings: Application settings (get_settings() if None)
        search_policy: Resilience policy for queries and deletes
        index_policy: Resilience policy for schema creation and upserts
        engine: Async engine for pgvector (built from settings if None)
        s3_client: boto3 's3vectors' client (built from settings if None)

    Returns:
        VectorStore: Configured backend

    Raises:
        ConfigurationError: Unknown provider
    """
    settings = settings or get_settings()
    store_config = settings.vector_store
    common = {
        "dimension": store_config.dimension,
        "metric": store_config.similarity_metric,
        "batch_size": store_config.batch_size,
        "search_policy": search_policy,
        "index_policy": index_policy,
    }

    if store_config.provider == VectorStoreProvider.S3:
        logger.info(f"{__name__}:get_vector_store - Creating S3 Vectors store (production mode)")
        return S3VectorsStore(
            vectors_bucket=settings.s3_vectors.bucket,
            index_name=settings.s3_vectors.index_name,
            region=settings.s3_vectors.region,
            client=s3_client,
            **common,
        )

    if store_config.provider == VectorStoreProvider.PGVECTOR:
        logger.info(
            f"{__name__}:get_vector_store - Creating pgvector store "
            f"(host={settings.pgvector.host}, table={settings.pgvector.table_name})"
        )
        return PgVectorStore(
            engine=engine or get_async_engine(settings.pgvector, application_name=settings.service_name),
            table_name=settings.pgvector.table_name,
            **common,
        )

    if store_config.provider == VectorStoreProvider.MEMORY:
        logger.info(f"{__name__}:get_vector_store - Creating in-memory store (local dev mode)")
        return InMemoryVectorStore(**common)

    raise ConfigurationError(
        f"Invalid VECTOR_STORE_PROVIDER: {store_config.provider}. "
        f"Must be 's3', 'pgvector' or 'memory'.",
        field="provider",
    )
