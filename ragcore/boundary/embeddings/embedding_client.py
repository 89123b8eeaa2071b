"""
Embedding client.

Turns text into fixed-dimension vectors through a LangChain Embeddings
provider. Every provider call runs under the embedding resilience policy;
query vectors are cached by model and normalized text.

Dependencies: langchain_core, ragcore.core.resilience, ragcore.core.caching
System role: Embedding stage of ingestion and retrieval
"""

import logging

from botocore.exceptions import BotoCoreError, ClientError
from langchain_core.embeddings import Embeddings

from ragcore.core.caching import MISS, ResultCache, make_cache_key
from ragcore.core.exceptions import (
    DataIntegrityError,
    InvalidArgumentError,
    ProviderUnavailableError,
    RagCoreException,
)
from ragcore.core.resilience import ResiliencePolicy
from ragcore.observability.log_utils import short_hash
from ragcore.observability.metrics import CACHE_HIT, CACHE_MISS, FailureSignals, get_signals

logger = logging.getLogger(__name__)


class EmbeddingClient:
    """Resilient, dimension-checked wrapper around a LangChain embeddings provider."""

    def __init__(
        self,
        embeddings: Embeddings,
        dimension: int,
        policy: ResiliencePolicy,
        cache: ResultCache | None = None,
        batch_size: int = 100,
        model_name: str | None = None,
        signals: FailureSignals | None = None,
    ) -> None:
        """
        Initialize embedding client.

        Args:
            embeddings: LangChain embeddings implementation
            dimension: Expected vector length
            policy: Timeout/retry/breaker policy for provider calls
            cache: Optional cache for query embeddings
            batch_size: Texts per provider request in embed_many
            model_name: Cache key namespace (derived from the provider if None)
            signals: Counter sink for cache hits and misses
        """
        if dimension <= 0:
            raise InvalidArgumentError("dimension must be positive", field="dimension")
        if batch_size <= 0:
            raise InvalidArgumentError("batch_size must be positive", field="batch_size")

        self._embeddings = embeddings
        self._dimension = dimension
        self._policy = policy
        self._cache = cache
        self._batch_size = batch_size
        self._model_name = model_name or _provider_model_name(embeddings)
        self._signals = signals or get_signals()

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def model_name(self) -> str:
        return self._model_name

    async def embed_one(self, text: str) -> list[float]:
        """
        Embed a single query text.

        Args:
            text: Non-blank text

        Returns:
            list[float]: Vector of length dimension

        Raises:
            InvalidArgumentError: Blank text
            ProviderUnavailableError: Provider unreachable after retries
            DataIntegrityError: Provider returned the wrong dimension
        """
        if not text or not text.strip():
            raise InvalidArgumentError("text cannot be empty", field="text")

        cache_key = None
        if self._cache is not None:
            cache_key = make_cache_key("embedding", self._model_name, text)
            cached = self._cache.get(cache_key)
            if cached is not MISS:
                self._signals.increment(CACHE_HIT)
                logger.debug(f"{__name__}:embed_one - Cache hit ({short_hash(cache_key)})")
                return list(cached)
            self._signals.increment(CACHE_MISS)

        vector = await self._policy.call(self._embed_query, text)
        self._check_dimension(vector)

        if self._cache is not None and cache_key is not None:
            self._cache.set(cache_key, tuple(vector))
        return list(vector)

    async def embed_many(self, texts: list[str]) -> list[list[float]]:
        """
        Embed texts in order, batch_size per provider request.

        Args:
            texts: Non-blank texts

        Returns:
            list[list[float]]: One vector per input, same order

        Raises:
            InvalidArgumentError: Any blank text
            ProviderUnavailableError: Provider unreachable after retries
            DataIntegrityError: Wrong vector count or dimension
        """
        if not texts:
            return []
        for i, text in enumerate(texts):
            if not text or not text.strip():
                raise InvalidArgumentError(f"texts[{i}] cannot be empty", field="texts")

        vectors: list[list[float]] = []
        for start in range(0, len(texts), self._batch_size):
            batch = texts[start:start + self._batch_size]
            batch_vectors = await self._policy.call(self._embed_documents, batch)
            if len(batch_vectors) != len(batch):
                raise DataIntegrityError(
                    f"Provider returned {len(batch_vectors)} vectors for {len(batch)} texts",
                    details={"batch_start": start},
                )
            for vector in batch_vectors:
                self._check_dimension(vector)
            vectors.extend(list(v) for v in batch_vectors)

        logger.info(
            f"{__name__}:embed_many - Embedded {len(vectors)} texts",
            extra={"model": self._model_name, "batches": -(-len(texts) // self._batch_size)},
        )
        return vectors

    async def _embed_query(self, text: str) -> list[float]:
        try:
            return await self._embeddings.aembed_query(text)
        except RagCoreException:
            raise
        except (BotoCoreError, ClientError) as e:
            raise _provider_error(e, "embed_query") from e
        except Exception as e:
            logger.error(f"{__name__}:_embed_query - {type(e).__name__}: {e}")
            raise _provider_error(e, "embed_query") from e

    async def _embed_documents(self, texts: list[str]) -> list[list[float]]:
        try:
            return await self._embeddings.aembed_documents(texts)
        except RagCoreException:
            raise
        except (BotoCoreError, ClientError) as e:
            raise _provider_error(e, "embed_documents") from e
        except Exception as e:
            logger.error(f"{__name__}:_embed_documents - {type(e).__name__}: {e}")
            raise _provider_error(e, "embed_documents") from e

    def _check_dimension(self, vector: list[float]) -> None:
        if len(vector) != self._dimension:
            raise DataIntegrityError(
                f"Embedding dimension {len(vector)} does not match expected {self._dimension}",
                details={"expected": self._dimension, "actual": len(vector)},
            )


def _provider_model_name(embeddings: Embeddings) -> str:
    for attr in ("model_id", "model"):
        value = getattr(embeddings, attr, None)
        if isinstance(value, str) and value:
            return value
    return type(embeddings).__name__


def _provider_error(exc: Exception, operation: str) -> ProviderUnavailableError:
    return ProviderUnavailableError(
        f"Embedding provider error: {type(exc).__name__}",
        provider="embedding",
        operation=operation,
    )
