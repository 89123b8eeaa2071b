"""
Distance to similarity mapping.

Backends report distances in different shapes; callers always receive a
similarity where higher is more relevant.

- cosine: distance d = 1 - cos in [0, 2], score 1 - d/2 in [0, 1]
- dot_product: pgvector '<#>' returns the negated inner product, score -d;
  an index served as cosine reports 1 - cos, score 1 - d
- euclidean: L2 distance d >= 0, score 1 / (1 + d) in (0, 1]

Dependencies: ragcore.configs.vector_store
System role: Score normalization shared by all vector store backends
"""

import math
from typing import Sequence

from ragcore.configs.vector_store import SimilarityMetric


def distance_to_score(
    metric: SimilarityMetric,
    distance: float,
    dot_product_as_cosine: bool = False,
) -> float:
    """
    Map a backend distance to a similarity score.

    Args:
        metric: Configured similarity metric
        distance: Distance reported by the backend
        dot_product_as_cosine: The index serves dot_product with cosine distance

    Returns:
        float: Similarity, higher is better
    """
    if metric == SimilarityMetric.COSINE:
        return 1.0 - distance / 2.0
    if metric == SimilarityMetric.DOT_PRODUCT:
        return 1.0 - distance if dot_product_as_cosine else -distance
    if metric == SimilarityMetric.EUCLIDEAN:
        return 1.0 / (1.0 + distance)
    raise ValueError(f"Unsupported similarity metric: {metric}")


def distance(metric: SimilarityMetric, a: Sequence[float], b: Sequence[float]) -> float:
    """Distance between two vectors, shaped the way pgvector reports it for metric."""
    if metric == SimilarityMetric.COSINE:
        norm_a = math.sqrt(sum(x * x for x in a))
        norm_b = math.sqrt(sum(x * x for x in b))
        if norm_a == 0 or norm_b == 0:
            return 1.0
        return 1.0 - _dot(a, b) / (norm_a * norm_b)
    if metric == SimilarityMetric.DOT_PRODUCT:
        return -_dot(a, b)
    if metric == SimilarityMetric.EUCLIDEAN:
        return math.sqrt(sum((x - y) ** 2 for x, y in zip(a, b)))
    raise ValueError(f"Unsupported similarity metric: {metric}")


def _dot(a: Sequence[float], b: Sequence[float]) -> float:
    return sum(x * y for x, y in zip(a, b))
