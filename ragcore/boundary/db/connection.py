"""
Async engine for the pgvector backend.

One engine per process, built from PgVectorSettings. Connections are
checked with a pre-ping so a restarted database surfaces as a retryable
driver error instead of a dead pooled connection.

Dependencies: sqlalchemy[asyncio], asyncpg, ragcore.configs
System role: Postgres connection pool for the vector store
"""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from ragcore.configs.vector_store import PgVectorSettings

logger = logging.getLogger(__name__)


def get_async_engine(
    settings: PgVectorSettings | None = None,
    application_name: str = "ragcore",
) -> AsyncEngine:
    """
    Create the pooled asyncpg engine.

    Args:
        settings: pgvector settings (read from the environment if None)
        application_name: Reported to Postgres in pg_stat_activity

    Returns:
        AsyncEngine: Engine using the default async queue pool
    """
    config = settings or PgVectorSettings()
    logger.info(
        f"{__name__}:get_async_engine - host={config.host}, database={config.database}, "
        f"pool_size={config.pool_size}, max_overflow={config.max_overflow}"
    )
    return create_async_engine(
        config.async_database_url,
        echo=config.echo_sql,
        pool_size=config.pool_size,
        max_overflow=config.max_overflow,
        pool_timeout=config.pool_timeout,
        pool_pre_ping=True,
        connect_args={"server_settings": {"application_name": application_name}},
    )
