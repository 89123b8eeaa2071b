"""
Vector store configuration settings.

Selects the vector store backend once at process start and carries the
per-backend connection parameters. Passwords are read from the
environment only.

Dependencies: pydantic, pydantic_settings, sqlalchemy (URL)
System role: Vector database configuration for indexing and retrieval
"""

import re
from enum import Enum

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]{0,62}$")


class VectorStoreProvider(str, Enum):
    """Vector store backend selector."""

    S3 = "s3"
    PGVECTOR = "pgvector"
    MEMORY = "memory"


class SimilarityMetric(str, Enum):
    """Similarity metric used by the vector index."""

    COSINE = "cosine"
    DOT_PRODUCT = "dot_product"
    EUCLIDEAN = "euclidean"


class S3VectorsSettings(BaseSettings):
    """Amazon S3 Vectors (managed vector search) configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="S3_VECTORS_",
        case_sensitive=False,
        extra="ignore",
    )

    bucket: str = Field(default="ragcore-dev-vectors", description="S3 Vectors bucket name")
    index_name: str = Field(default="documents", description="Index name within the bucket")
    region: str = Field(default="us-east-1", description="AWS region for S3 Vectors")


class PgVectorSettings(BaseSettings):
    """PostgreSQL + pgvector configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PGVECTOR_",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="localhost", description="PostgreSQL host")
    port: int = Field(default=5432, description="PostgreSQL port")
    user: str = Field(default="postgres", description="PostgreSQL user")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="PostgreSQL password (PGVECTOR_PASSWORD env only)",
    )
    database: str = Field(default="ragcore", description="PostgreSQL database name")
    table_name: str = Field(default="ragcore_chunks", description="Chunk table name")

    pool_size: int = Field(default=10, description="Connection pool size")
    max_overflow: int = Field(default=20, description="Maximum overflow connections")
    pool_timeout: int = Field(default=30, description="Connection pool timeout in seconds")
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")
    sslmode: str = Field(default="prefer", description="SSL mode ('require' for managed Postgres)")

    @field_validator("table_name")
    @classmethod
    def _validate_table_name(cls, value: str) -> str:
        if not _IDENTIFIER.match(value):
            raise ValueError(f"table_name must be a plain SQL identifier, got {value!r}")
        return value

    @property
    def async_database_url(self) -> URL:
        """
        Construct async PostgreSQL connection URL.

        Credentials are escaped by SQLAlchemy, so passwords may contain
        '@', '/', ':' or '#'.

        Returns:
            URL: SQLAlchemy async-compatible database URL (asyncpg uses 'ssl' param)
        """
        return URL.create(
            drivername="postgresql+asyncpg",
            username=self.user,
            password=self.password.get_secret_value(),
            host=self.host,
            port=self.port,
            database=self.database,
            query={"ssl": "require"} if self.sslmode == "require" else {},
        )


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (S3 Vectors, pgvector or in-memory)."""

    provider: VectorStoreProvider = Field(
        default=VectorStoreProvider.S3,
        description="Backend: 's3' (managed), 'pgvector' (relational) or 'memory' (local dev)",
    )
    dimension: int = Field(
        default=1024,
        gt=0,
        description="Vector dimension of the index (must match embeddings)",
    )
    similarity_metric: SimilarityMetric = Field(
        default=SimilarityMetric.COSINE,
        description="cosine, dot_product or euclidean",
    )
    batch_size: int = Field(
        default=100,
        gt=0,
        le=500,
        description="Chunks per write request",
    )
    default_top_k: int = Field(default=3, gt=0, description="Default number of results")

    class Config:
        """Pydantic config."""

        env_prefix = "VECTOR_STORE_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"
