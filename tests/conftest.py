"""
Shared test fixtures and configuration for entire test suite.

Provides: deterministic fake embeddings, small chunking settings, fast
resilience policies, in-memory vector store, fresh failure counters
Dependencies: pytest, langchain_core
System role: Test infrastructure and fixture management
"""

import hashlib
import math

import pytest
from langchain_core.embeddings import Embeddings

from ragcore.boundary.embeddings import EmbeddingClient
from ragcore.boundary.vdb import InMemoryVectorStore
from ragcore.configs import ChunkingSettings
from ragcore.core.resilience import CircuitBreaker, ResiliencePolicy
from ragcore.core.tokenization import ApproximateTokenCounter
from ragcore.observability.metrics import FailureSignals

TEST_DIMENSION = 8


class BagOfWordsEmbeddings(Embeddings):
    """Deterministic embeddings: each word adds weight to a hashed bucket."""

    def __init__(self, dimension: int = TEST_DIMENSION) -> None:
        self.dimension = dimension
        self.model = "bag-of-words-test"
        self.query_calls = 0
        self.document_calls = 0

    def _vector(self, text: str) -> list[float]:
        vector = [0.0] * self.dimension
        for word in text.lower().split():
            bucket = int(hashlib.sha256(word.strip(".,!?").encode()).hexdigest(), 16) % self.dimension
            vector[bucket] += 1.0
        norm = math.sqrt(sum(x * x for x in vector)) or 1.0
        return [x / norm for x in vector]

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        self.document_calls += 1
        return [self._vector(t) for t in texts]

    def embed_query(self, text: str) -> list[float]:
        self.query_calls += 1
        return self._vector(text)


def unit_vector(index: int, dimension: int = TEST_DIMENSION) -> list[float]:
    vector = [0.0] * dimension
    vector[index] = 1.0
    return vector


@pytest.fixture
def fake_embeddings() -> BagOfWordsEmbeddings:
    """Provide deterministic embeddings."""
    return BagOfWordsEmbeddings()


@pytest.fixture
def signals() -> FailureSignals:
    """Provide isolated failure counters."""
    return FailureSignals()


@pytest.fixture
def fast_policy() -> ResiliencePolicy:
    """Provide a policy with two attempts and no backoff delay."""
    return ResiliencePolicy(
        name="test",
        timeout_seconds=1.0,
        max_attempts=2,
        backoff_initial=0,
        backoff_max=0,
        jitter=0,
    )


@pytest.fixture
def breaker(signals: FailureSignals) -> CircuitBreaker:
    """Provide a breaker that opens after two failures out of two calls."""
    return CircuitBreaker(
        name="test",
        failure_rate_threshold=0.5,
        minimum_calls=2,
        window_seconds=60,
        cooldown_seconds=30,
        signals=signals,
    )


@pytest.fixture
def embedding_client(
    fake_embeddings: BagOfWordsEmbeddings,
    fast_policy: ResiliencePolicy,
    signals: FailureSignals,
) -> EmbeddingClient:
    """Provide embedding client over fake embeddings without cache."""
    return EmbeddingClient(
        embeddings=fake_embeddings,
        dimension=TEST_DIMENSION,
        policy=fast_policy,
        batch_size=4,
        signals=signals,
    )


@pytest.fixture
def memory_store() -> InMemoryVectorStore:
    """Provide empty in-memory vector store."""
    return InMemoryVectorStore(dimension=TEST_DIMENSION, batch_size=3)


@pytest.fixture
def token_counter() -> ApproximateTokenCounter:
    """Provide the 4-characters-per-token counter."""
    return ApproximateTokenCounter()


@pytest.fixture
def small_chunking_settings() -> ChunkingSettings:
    """Provide chunking settings small enough to split short test texts."""
    return ChunkingSettings(chunk_size_tokens=50, overlap_tokens=10, min_chunk_tokens=0)
