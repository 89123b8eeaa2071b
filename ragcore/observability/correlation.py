"""
Correlation ids for ingestion and retrieval runs.

Each run logs under one id, carried through awaits by a ContextVar. A
host that already has a request id sets it first; otherwise the service
mints one.

Dependencies: contextvars, uuid
System role: Log correlation across one ingestion or retrieval run
"""

import uuid
from contextvars import ContextVar

_correlation_id: ContextVar[str] = ContextVar("ragcore_correlation_id", default="")


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Bind correlation_id (a new uuid4 hex if None) to the current context."""
    value = correlation_id or uuid.uuid4().hex
    _correlation_id.set(value)
    return value


def get_correlation_id() -> str:
    return _correlation_id.get()


def ensure_correlation_id() -> str:
    """Keep the caller's id when one is bound, else start a new one."""
    return get_correlation_id() or set_correlation_id()


def clear_correlation_id() -> None:
    _correlation_id.set("")
