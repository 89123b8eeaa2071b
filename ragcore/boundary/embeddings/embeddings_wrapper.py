"""
Gemini embeddings pinned to one output dimension.

GoogleGenerativeAIEmbeddings ignores output_dimensionality given to its
constructor. Every sync and async embed call made through this class
passes the configured dimension, so vectors always match the index.

Dependencies: langchain_google_genai
System role: Dimension-stable Google embedding provider
"""

import logging
from typing import Any

from langchain_google_genai import GoogleGenerativeAIEmbeddings

logger = logging.getLogger(__name__)


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """Google embeddings that request the same dimension on every call."""

    _output_dimensionality: int = 1024

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        output_dimensionality: int = 1024,
        **kwargs,
    ) -> None:
        """
        Args:
            model: Gemini embedding model supporting reduced dimensions
            output_dimensionality: Dimension requested on every call
            **kwargs: Forwarded to GoogleGenerativeAIEmbeddings
        """
        super().__init__(model=model, **kwargs)
        self._output_dimensionality = output_dimensionality
        logger.info(
            f"{__name__}:__init__ - model={model}, output_dimensionality={output_dimensionality}"
        )

    @property
    def output_dimensionality(self) -> int:
        return self._output_dimensionality

    def _pinned(self, kwargs: dict[str, Any]) -> dict[str, Any]:
        kwargs.setdefault("output_dimensionality", self._output_dimensionality)
        return kwargs

    def embed_documents(self, texts: list[str], **kwargs) -> list[list[float]]:
        return super().embed_documents(texts, **self._pinned(kwargs))

    def embed_query(self, text: str, **kwargs) -> list[float]:
        return super().embed_query(text, **self._pinned(kwargs))

    async def aembed_documents(self, texts: list[str], **kwargs) -> list[list[float]]:
        return await super().aembed_documents(texts, **self._pinned(kwargs))

    async def aembed_query(self, text: str, **kwargs) -> list[float]:
        return await super().aembed_query(text, **self._pinned(kwargs))
