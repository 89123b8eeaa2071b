"""
Deterministic cache key construction.

Keys are SHA-256 digests of whitespace-normalized parts, so raw query
text never appears in cache keys or logs.

Dependencies: hashlib (stdlib)
System role: Cache key derivation for embeddings and retrieval results
"""

import hashlib

_PART_SEPARATOR = "\x1f"


def normalize_text(text: str) -> str:
    """Collapse runs of whitespace and trim."""
    return " ".join(text.split())


def make_cache_key(*parts: object) -> str:
    """
    Build a cache key from ordered parts.

    Args:
        *parts: Key components (model name, query text, top_k, ...)

    Returns:
        str: Hex SHA-256 digest
    """
    joined = _PART_SEPARATOR.join(normalize_text(str(part)) for part in parts)
    return hashlib.sha256(joined.encode("utf-8")).hexdigest()
