"""
In-process failure signal counters.

Counts degraded retrievals, provider failures and circuit transitions so
that "provider unavailable" is observable and distinguishable from "no
matches". Export wiring is left to the host process.

Dependencies: threading (stdlib)
System role: Failure signals for the retrieval and resilience layers
"""

import threading
from collections import Counter

RETRIEVAL_PROVIDER_UNAVAILABLE = "retrieval.provider_unavailable"
RETRIEVAL_EMPTY = "retrieval.empty"
RETRIEVAL_SUCCESS = "retrieval.success"
INGESTION_FAILED = "ingestion.failed"
INGESTION_COMPLETED = "ingestion.completed"
CIRCUIT_OPENED = "circuit.opened"
CACHE_HIT = "cache.hit"
CACHE_MISS = "cache.miss"


class FailureSignals:
    """Thread-safe named counters."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counts: Counter[str] = Counter()

    def increment(self, name: str, amount: int = 1) -> None:
        with self._lock:
            self._counts[name] += amount

    def get(self, name: str) -> int:
        with self._lock:
            return self._counts[name]

    def snapshot(self) -> dict[str, int]:
        with self._lock:
            return dict(self._counts)

    def reset(self) -> None:
        with self._lock:
            self._counts.clear()


_default_signals = FailureSignals()


def get_signals() -> FailureSignals:
    """Process-wide counters used when no instance is injected."""
    return _default_signals
