"""Token-aware chunking."""

from ragcore.core.chunking.document_chunker import DocumentChunker
from ragcore.core.chunking.overlap import get_overlap_text
from ragcore.core.chunking.sentence_splitter import (
    split_paragraphs,
    split_sentences,
    split_sentences_basic,
    split_sentences_improved,
)

__all__ = [
    "DocumentChunker",
    "get_overlap_text",
    "split_paragraphs",
    "split_sentences",
    "split_sentences_basic",
    "split_sentences_improved",
]
