"""
Exception hierarchy for the retrieval engine.

Provides layered exception structure for chunking, embedding, indexing
and retrieval errors. All exceptions include context for observability.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the engine
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Error taxonomy shared by exceptions and typed results."""

    INVALID_ARGUMENT = "invalid_argument"
    PROVIDER_UNAVAILABLE = "provider_unavailable"
    DATA_INTEGRITY = "data_integrity"


class RagCoreException(Exception):
    """Base exception for all retrieval engine errors."""

    kind: ErrorKind | None = None

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidArgumentError(RagCoreException):
    """Raised on blank inputs, non-positive top_k or mismatched dimensions.

    Always a local, immediate rejection. Never retried.
    """

    kind = ErrorKind.INVALID_ARGUMENT

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize invalid argument error.

        Args:
            message: Error message
            field: Argument name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ConfigurationError(InvalidArgumentError):
    """Raised at startup when configured components are incompatible."""

    pass


class ProviderUnavailableError(RagCoreException):
    """Raised when an embedding or vector store provider cannot be reached.

    Covers timeouts, transport failures and open circuits.
    """

    kind = ErrorKind.PROVIDER_UNAVAILABLE

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize provider unavailable error.

        Args:
            message: Error message
            provider: Dependency name (embedding, vector_store, ...)
            operation: Operation that failed (embed, upsert, query, delete)
            details: Additional context
        """
        details = details or {}
        if provider:
            details["provider"] = provider
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class CircuitOpenError(ProviderUnavailableError):
    """Raised without calling the provider while its circuit is open."""

    def __init__(self, provider: str, retry_after_seconds: float) -> None:
        super().__init__(
            f"Circuit open for {provider}",
            provider=provider,
            details={"retry_after_seconds": round(retry_after_seconds, 3)},
        )
        self.retry_after_seconds = retry_after_seconds


class DataIntegrityError(RagCoreException):
    """Raised when produced data is inconsistent, e.g. embedding count != chunk count."""

    kind = ErrorKind.DATA_INTEGRITY

    def __init__(
        self,
        message: str,
        source_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if source_id:
            details["source_id"] = source_id
        super().__init__(message, details)
