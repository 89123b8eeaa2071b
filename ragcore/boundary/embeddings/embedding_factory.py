"""
Embedding provider factory.

Builds the LangChain Embeddings implementation selected by
EmbeddingSettings.provider. The provider is chosen once at startup.

Dependencies: langchain_aws, langchain_google_genai, python-dotenv, ragcore.configs
System role: Embedding provider selection
"""

import logging

from dotenv import load_dotenv
from langchain_aws import BedrockEmbeddings
from langchain_core.embeddings import Embeddings

from ragcore.boundary.embeddings.embeddings_wrapper import FixedDimensionEmbeddings
from ragcore.configs.embedding import EmbeddingProvider, EmbeddingSettings
from ragcore.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Provider credentials (AWS_*, GOOGLE_API_KEY) are read from the environment
load_dotenv()


def create_embeddings(settings: EmbeddingSettings) -> Embeddings:
    """
    Create the configured embedding model.

    Args:
        settings: Embedding settings

    Returns:
        Embeddings: LangChain embeddings instance

    Raises:
        ConfigurationError: Unknown provider
    """
    logger.info(
        f"{__name__}:create_embeddings - provider={settings.provider.value}, "
        f"model={settings.model_id}, dimension={settings.dimension}"
    )

    if settings.provider == EmbeddingProvider.BEDROCK:
        # Titan v2 accepts 256, 512 or 1024 dimensions
        return BedrockEmbeddings(
            model_id=settings.model_id,
            region_name=settings.region,
            model_kwargs={"dimensions": settings.dimension, "normalize": True},
        )

    if settings.provider == EmbeddingProvider.GOOGLE:
        return FixedDimensionEmbeddings(
            model=settings.model_id,
            output_dimensionality=settings.dimension,
        )

    raise ConfigurationError(
        f"Unsupported embedding provider: {settings.provider}",
        field="provider",
    )
