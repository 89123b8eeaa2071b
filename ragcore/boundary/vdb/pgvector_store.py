"""
PostgreSQL + pgvector store.

Chunks live in one table with a vector column and an HNSW index using the
operator class of the configured metric. All statements are parameterized;
the table name is validated as a plain identifier before it is formatted
into SQL.

Dependencies: sqlalchemy[asyncio], asyncpg, ragcore.boundary.vdb.base
System role: Relational vector store (pgvector)
"""

import logging
import re

from sqlalchemy import text
from sqlalchemy.exc import (
    DataError,
    DBAPIError,
    IntegrityError,
    ProgrammingError,
    TimeoutError as PoolTimeoutError,
)
from sqlalchemy.ext.asyncio import AsyncEngine

from ragcore.boundary.vdb.base import VectorStore
from ragcore.boundary.vdb.scoring import distance_to_score
from ragcore.configs.vector_store import SimilarityMetric
from ragcore.core.exceptions import (
    DataIntegrityError,
    InvalidArgumentError,
    ProviderUnavailableError,
    RagCoreException,
)
from ragcore.models.chunk import Chunk
from ragcore.models.search import SearchResult

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]{0,62}$")

# (distance operator, HNSW operator class)
_OPERATORS = {
    SimilarityMetric.COSINE: ("<=>", "vector_cosine_ops"),
    SimilarityMetric.DOT_PRODUCT: ("<#>", "vector_ip_ops"),
    SimilarityMetric.EUCLIDEAN: ("<->", "vector_l2_ops"),
}

# asyncpg has no codec for the vector type; values are sent as text and cast
_VECTOR_PARAM = "CAST(CAST(:{name} AS TEXT) AS vector)"


def to_vector_literal(vector: list[float]) -> str:
    """Render a vector in pgvector's text input format: [1.0,2.0,...]."""
    return "[" + ",".join(repr(float(x)) for x in vector) + "]"


class PgVectorStore(VectorStore):
    """pgvector backend over an async SQLAlchemy engine."""

    provider_name = "pgvector"

    def __init__(
        self,
        engine: AsyncEngine,
        table_name: str = "ragcore_chunks",
        **kwargs,
    ) -> None:
        """
        Initialize pgvector store.

        Args:
            engine: Async SQLAlchemy engine (postgresql+asyncpg)
            table_name: Chunk table name (plain SQL identifier)
            **kwargs: dimension, metric, batch_size and policies for VectorStore

        Raises:
            InvalidArgumentError: table_name is not a plain identifier
        """
        super().__init__(**kwargs)
        if not _IDENTIFIER.match(table_name):
            raise InvalidArgumentError(
                f"table_name must be a plain SQL identifier, got {table_name!r}",
                field="table_name",
            )
        self._engine = engine
        self._table = table_name
        self._operator, self._opclass = _OPERATORS[self.metric]

    async def _initialize(self) -> None:
        statements = [
            "CREATE EXTENSION IF NOT EXISTS vector",
            f"""
            CREATE TABLE IF NOT EXISTS {self._table} (
                chunk_id TEXT PRIMARY KEY,
                chunk_index INTEGER NOT NULL,
                content TEXT NOT NULL,
                embedding vector({self.dimension}) NOT NULL,
                source_id TEXT NOT NULL,
                source_name TEXT NOT NULL,
                indexed_at TIMESTAMPTZ NOT NULL
            )
            """,
            f"CREATE INDEX IF NOT EXISTS idx_{self._table}_source_id ON {self._table} (source_id)",
            f"CREATE INDEX IF NOT EXISTS idx_{self._table}_embedding "
            f"ON {self._table} USING hnsw (embedding {self._opclass})",
        ]
        try:
            async with self._engine.begin() as conn:
                for statement in statements:
                    await conn.execute(text(statement))
        except (DBAPIError, PoolTimeoutError) as e:
            raise self._translate(e, "initialize") from e
        logger.info(f"{__name__}:_initialize - Schema ready for {self._table}")

    async def _upsert_batch(self, chunks: list[Chunk]) -> None:
        statement = text(
            f"""
            INSERT INTO {self._table}
                (chunk_id, chunk_index, content, embedding, source_id, source_name, indexed_at)
            VALUES
                (:chunk_id, :chunk_index, :content, {_VECTOR_PARAM.format(name="embedding")},
                 :source_id, :source_name, :indexed_at)
            ON CONFLICT (chunk_id) DO UPDATE SET
                chunk_index = EXCLUDED.chunk_index,
                content = EXCLUDED.content,
                embedding = EXCLUDED.embedding,
                source_id = EXCLUDED.source_id,
                source_name = EXCLUDED.source_name,
                indexed_at = EXCLUDED.indexed_at
            """
        )
        rows = [
            {
                "chunk_id": chunk.chunk_id,
                "chunk_index": chunk.chunk_index,
                "content": chunk.content,
                "embedding": to_vector_literal(chunk.vector),
                "source_id": chunk.source_id,
                "source_name": chunk.source_name,
                "indexed_at": chunk.indexed_at,
            }
            for chunk in chunks
        ]
        try:
            async with self._engine.begin() as conn:
                await conn.execute(statement, rows)
        except (DBAPIError, PoolTimeoutError) as e:
            raise self._translate(e, "upsert") from e

    async def _query(self, query_vector: list[float], top_k: int) -> list[SearchResult]:
        query_param = _VECTOR_PARAM.format(name="query")
        statement = text(
            f"""
            SELECT chunk_id, chunk_index, content, source_id, source_name, indexed_at,
                   embedding {self._operator} {query_param} AS distance
            FROM {self._table}
            ORDER BY embedding {self._operator} {query_param}
            LIMIT :top_k
            """
        )
        try:
            async with self._engine.connect() as conn:
                result = await conn.execute(
                    statement,
                    {"query": to_vector_literal(query_vector), "top_k": top_k},
                )
                rows = result.mappings().all()
        except (DBAPIError, PoolTimeoutError) as e:
            raise self._translate(e, "query") from e

        return [
            SearchResult(
                chunk=Chunk(
                    chunk_id=row["chunk_id"],
                    chunk_index=row["chunk_index"],
                    content=row["content"],
                    source_id=row["source_id"],
                    source_name=row["source_name"],
                    indexed_at=row["indexed_at"],
                ),
                score=distance_to_score(self.metric, float(row["distance"])),
            )
            for row in rows
        ]

    async def _delete_source(self, source_id: str) -> int:
        statement = text(f"DELETE FROM {self._table} WHERE source_id = :source_id")
        try:
            async with self._engine.begin() as conn:
                result = await conn.execute(statement, {"source_id": source_id})
        except (DBAPIError, PoolTimeoutError) as e:
            raise self._translate(e, "delete") from e
        return max(result.rowcount or 0, 0)

    def _translate(self, exc: Exception, operation: str) -> RagCoreException:
        """
        Map a SQLAlchemy error onto the ragcore error taxonomy.

        Statement errors (wrong vector dimension on an existing table, bad
        SQL, constraint violations) are rejected as-is and never retried.
        Connection, pool and server-side failures become provider outages.
        """
        error_name = type(exc).__name__
        logger.error(
            f"{__name__}:{operation} - {error_name}: {exc}",
            extra={"table": self._table},
        )
        if isinstance(exc, IntegrityError):
            return DataIntegrityError(
                f"pgvector {operation} violated a constraint: {error_name}",
                details={"table": self._table, "operation": operation},
            )
        if isinstance(exc, (DataError, ProgrammingError)):
            return InvalidArgumentError(
                f"pgvector {operation} rejected the statement: {error_name}",
                details={
                    "table": self._table,
                    "operation": operation,
                    "dimension": self.dimension,
                },
            )
        return ProviderUnavailableError(
            f"pgvector {operation} failed: {error_name}",
            provider=self.provider_name,
            operation=operation,
        )
