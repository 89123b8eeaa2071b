"""Timeouts, retries and circuit breaking for provider calls."""

from ragcore.core.resilience.circuit_breaker import CircuitBreaker, CircuitState
from ragcore.core.resilience.policy import (
    ResiliencePolicy,
    breaker_from_settings,
    embedding_policy,
    index_policy,
    search_policy,
)

__all__ = [
    "CircuitBreaker",
    "CircuitState",
    "ResiliencePolicy",
    "breaker_from_settings",
    "embedding_policy",
    "index_policy",
    "search_policy",
]
