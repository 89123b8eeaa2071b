"""
Overlap extraction between adjacent chunks.

Finds the shortest suffix of the previous chunk that reaches the overlap
token target, then snaps its start forward to a word boundary.

Dependencies: ragcore.core.tokenization
System role: Context continuity across chunk boundaries
"""

import re

from ragcore.core.tokenization import TokenCounter

_WHITESPACE = re.compile(r"\s")


def get_overlap_text(text: str, overlap_tokens: int, token_counter: TokenCounter) -> str:
    """
    Extract the overlap that seeds the next chunk.

    Args:
        text: Previous chunk text
        overlap_tokens: Target overlap size in tokens
        token_counter: Token counting strategy

    Returns:
        str: Tail of text holding at least min(overlap_tokens, tokens(text))
        tokens, minus a partial leading word
    """
    if not text or overlap_tokens <= 0:
        return ""

    target = min(overlap_tokens, token_counter.count_tokens(text))
    if target <= 0:
        return ""

    # Lower-bound search: shortest suffix length whose token count >= target
    low, high = 0, len(text)
    while low < high:
        mid = (low + high) // 2
        if token_counter.count_tokens(text[len(text) - mid:]) >= target:
            high = mid
        else:
            low = mid + 1

    start = len(text) - low
    overlap = text[start:]

    # Suffix starts mid-word: drop the fragment when the next boundary is in the first half
    if start > 0 and not text[start - 1].isspace() and not overlap[:1].isspace():
        boundary = _WHITESPACE.search(overlap)
        if boundary is not None and 0 < boundary.start() < len(overlap) / 2:
            overlap = overlap[boundary.start() + 1:]

    return overlap.lstrip()
