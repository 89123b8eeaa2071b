"""
Token counting strategies.

Approximate counting (4 characters per token) and exact counting through a
tiktoken BPE encoding, interchangeable behind the TokenCounter protocol.

Dependencies: tiktoken
System role: Chunk sizing for the chunker
"""

import math
from typing import Protocol, runtime_checkable

import tiktoken

from ragcore.configs.chunking import TokenizerMode

CHARS_PER_TOKEN = 4


@runtime_checkable
class TokenCounter(Protocol):
    """Counts tokens in text; model_name identifies the strategy in logs and cache keys."""

    @property
    def model_name(self) -> str: ...

    def count_tokens(self, text: str) -> int: ...


class ApproximateTokenCounter:
    """Character-based estimate: ceil(len(text) / 4)."""

    @property
    def model_name(self) -> str:
        return "approx-4chars"

    def count_tokens(self, text: str) -> int:
        if not text:
            return 0
        return math.ceil(len(text) / CHARS_PER_TOKEN)


class TiktokenTokenCounter:
    """Exact token count using a tiktoken encoding (cl100k_base by default)."""

    def __init__(self, encoding_name: str = "cl100k_base") -> None:
        self._encoding_name = encoding_name
        self._encoding = tiktoken.get_encoding(encoding_name)

    @property
    def model_name(self) -> str:
        return f"tiktoken-{self._encoding_name}"

    def count_tokens(self, text: str) -> int:
        if not text:
            return 0
        # Special-token text is counted as plain text instead of raising
        return len(self._encoding.encode(text, disallowed_special=()))


def build_token_counter(
    mode: TokenizerMode = TokenizerMode.APPROXIMATE,
    encoding_name: str = "cl100k_base",
) -> TokenCounter:
    """
    Create the token counter for the configured mode.

    Args:
        mode: approximate or exact
        encoding_name: tiktoken encoding for exact mode

    Returns:
        TokenCounter: Counter instance
    """
    if mode == TokenizerMode.EXACT:
        return TiktokenTokenCounter(encoding_name)
    return ApproximateTokenCounter()
