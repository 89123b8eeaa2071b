"""
Structured logging helpers that never write document or query text.

Chunk ids and queries are logged as short hashes; collections as their
sizes. Exceptions carry their ErrorKind so provider outages can be told
apart from bad input in the logs.

Dependencies: logging (stdlib), hashlib
System role: Logging helper functions
"""

import hashlib
import logging
from typing import Any

from ragcore.core.exceptions import RagCoreException


def short_hash(value: str, length: int = 8) -> str:
    """Stable short hash used to log chunk ids and queries without their text."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()[:length]


def describe_value(value: Any, max_length: int = 200) -> str:
    """
    Render a context value for a log record.

    Sequences and mappings collapse to their size; long strings are cut.

    Args:
        value: Value to render
        max_length: Longest string kept verbatim

    Returns:
        str: Log-safe rendering
    """
    if value is None:
        return "None"
    if isinstance(value, (list, tuple, set)):
        return f"{type(value).__name__}[{len(value)}]"
    if isinstance(value, dict):
        return f"dict[{len(value)}]"
    if isinstance(value, bytes):
        return f"bytes[{len(value)}]"
    text = str(value)
    if len(text) > max_length:
        return f"{text[:max_length]}... ({len(text)} chars)"
    return text


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context,
) -> None:
    """
    Log an exception with its kind, type and rendered context.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        **context: Identifiers of the failed operation
    """
    extra = {key: describe_value(val) for key, val in context.items()}
    extra["error_type"] = type(exc).__name__
    if isinstance(exc, RagCoreException):
        extra["error_kind"] = exc.kind.value if exc.kind else "unknown"
        extra["error_msg"] = exc.message
    else:
        extra["error_kind"] = "unexpected"
        extra["error_msg"] = describe_value(exc)
    logger.error(message, exc_info=exc, extra=extra)
