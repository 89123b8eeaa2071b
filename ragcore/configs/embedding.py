"""
Embedding configuration settings.

Selects the LangChain embedding provider and fixes the vector dimension
for the deployment.

Dependencies: pydantic, pydantic_settings
System role: Embedding client configuration
"""

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings


class EmbeddingProvider(str, Enum):
    """Supported embedding providers."""

    BEDROCK = "bedrock"
    GOOGLE = "google"


class EmbeddingSettings(BaseSettings):
    """Embedding provider configuration."""

    provider: EmbeddingProvider = Field(
        default=EmbeddingProvider.BEDROCK,
        description="Embedding provider: 'bedrock' (Titan) or 'google' (Gemini)",
    )
    model_id: str = Field(
        default="amazon.titan-embed-text-v2:0",
        description="Provider model identifier",
    )
    region: str = Field(default="us-east-1", description="AWS region for Bedrock embeddings")
    dimension: int = Field(
        default=1024,
        gt=0,
        description="Embedding vector dimension (must match the vector store)",
    )
    batch_size: int = Field(
        default=100,
        gt=0,
        description="Texts per embedding request",
    )

    class Config:
        """Pydantic config."""

        env_prefix = "EMBEDDING_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"
