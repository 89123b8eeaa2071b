"""
Core domain logic: chunking, tokenization, caching, resilience and
citation formatting. No provider I/O lives here.
"""

from ragcore.core.exceptions import (
    CircuitOpenError,
    ConfigurationError,
    DataIntegrityError,
    ErrorKind,
    InvalidArgumentError,
    ProviderUnavailableError,
    RagCoreException,
)

__all__ = [
    "CircuitOpenError",
    "ConfigurationError",
    "DataIntegrityError",
    "ErrorKind",
    "InvalidArgumentError",
    "ProviderUnavailableError",
    "RagCoreException",
]
