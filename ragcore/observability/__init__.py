"""
Observability module.

Provides logging configuration, correlation ID tracking and in-process
failure signal counters.
"""

from ragcore.observability.correlation import (
    clear_correlation_id,
    ensure_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from ragcore.observability.logger import configure_logging, get_logger
from ragcore.observability.metrics import FailureSignals, get_signals

__all__ = [
    "FailureSignals",
    "clear_correlation_id",
    "configure_logging",
    "ensure_correlation_id",
    "get_correlation_id",
    "get_logger",
    "get_signals",
    "set_correlation_id",
]
