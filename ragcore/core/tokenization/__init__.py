"""Token counting strategies."""

from ragcore.core.tokenization.token_counter import (
    ApproximateTokenCounter,
    TiktokenTokenCounter,
    TokenCounter,
    build_token_counter,
)

__all__ = [
    "ApproximateTokenCounter",
    "TiktokenTokenCounter",
    "TokenCounter",
    "build_token_counter",
]
