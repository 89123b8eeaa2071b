"""
Retrieval orchestration.

Embeds the query, searches the vector store and returns score-ordered
results. A provider outage is an explicit branch: empty results flagged
as degraded and counted, so callers can tell it apart from "no matches".

Dependencies: ragcore.boundary.embeddings, ragcore.boundary.vdb, ragcore.observability
System role: Query-time retrieval for grounded answers
"""

import logging

from ragcore.boundary.embeddings import EmbeddingClient
from ragcore.boundary.vdb import VectorStore
from ragcore.core.exceptions import ErrorKind, InvalidArgumentError, ProviderUnavailableError
from ragcore.models.search import RetrievalOutcome, SearchResult, sort_by_score
from ragcore.observability.correlation import ensure_correlation_id
from ragcore.observability.log_utils import short_hash
from ragcore.observability.metrics import (
    RETRIEVAL_EMPTY,
    RETRIEVAL_PROVIDER_UNAVAILABLE,
    RETRIEVAL_SUCCESS,
    FailureSignals,
    get_signals,
)

logger = logging.getLogger(__name__)


class RetrievalService:
    """Query embedding plus vector search with typed degradation."""

    def __init__(
        self,
        embedding_client: EmbeddingClient,
        vector_store: VectorStore,
        signals: FailureSignals | None = None,
        default_top_k: int = 3,
    ) -> None:
        """
        Initialize retrieval service.

        Args:
            embedding_client: Query embedding client
            vector_store: Configured vector store backend
            signals: Failure counters (process-wide instance if None)
            default_top_k: Result count when the caller passes none
        """
        self._embedding_client = embedding_client
        self._vector_store = vector_store
        self._signals = signals or get_signals()
        self._default_top_k = default_top_k

    async def retrieve(self, query: str, top_k: int | None = None) -> list[SearchResult]:
        """
        Retrieve the most relevant chunks for a query.

        Returns an empty list both for "no matches" and for a provider
        outage; use retrieve_outcome to distinguish them.

        Raises:
            InvalidArgumentError: Blank query or top_k <= 0
        """
        outcome = await self.retrieve_outcome(query, top_k)
        return outcome.results

    async def retrieve_outcome(self, query: str, top_k: int | None = None) -> RetrievalOutcome:
        """
        Retrieve with an explicit failure branch.

        Args:
            query: Query text
            top_k: Number of results (default_top_k if None)

        Returns:
            RetrievalOutcome: Score-descending results, failure set on provider outage

        Raises:
            InvalidArgumentError: Blank query or top_k <= 0
            DataIntegrityError: Provider returned malformed vectors
        """
        if not query or not query.strip():
            raise InvalidArgumentError("query cannot be empty", field="query")
        k = self._default_top_k if top_k is None else top_k
        if k <= 0:
            raise InvalidArgumentError("top_k must be positive", field="top_k")

        ensure_correlation_id()
        query_hash = short_hash(query)
        logger.info(
            f"{__name__}:retrieve_outcome - START: query={query_hash}, top_k={k}",
            extra={"query_length": len(query)},
        )

        try:
            query_vector = await self._embedding_client.embed_one(query)
            results = await self._vector_store.search(query_vector, k)
        except ProviderUnavailableError as e:
            self._signals.increment(RETRIEVAL_PROVIDER_UNAVAILABLE)
            logger.warning(
                f"{__name__}:retrieve_outcome - Provider unavailable, returning no context: {e}",
                extra={"query": query_hash, **e.details},
            )
            return RetrievalOutcome(results=[], failure=ErrorKind.PROVIDER_UNAVAILABLE)

        ranked = sort_by_score(results)[:k]
        if ranked:
            self._signals.increment(RETRIEVAL_SUCCESS)
        else:
            self._signals.increment(RETRIEVAL_EMPTY)

        logger.info(
            f"{__name__}:retrieve_outcome - SUCCESS: {len(ranked)} results",
            extra={"query": query_hash, "top_score": ranked[0].score if ranked else None},
        )
        return RetrievalOutcome(results=ranked)
