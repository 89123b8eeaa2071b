"""
Token-aware document chunker.

Splits plain text into overlapping, size-bounded chunks. Paragraphs are
accumulated greedily; paragraphs that overflow the budget are re-split by
sentences. Every new chunk is seeded with the tail of the previous one.
Chunks below the minimum size are merged forward.

Dependencies: ragcore.core.tokenization, ragcore.models.chunk, ragcore.configs
System role: First stage of document ingestion
"""

import logging

from ragcore.configs.chunking import ChunkingSettings
from ragcore.core.chunking.overlap import get_overlap_text
from ragcore.core.chunking.sentence_splitter import split_paragraphs, split_sentences
from ragcore.core.exceptions import InvalidArgumentError
from ragcore.core.tokenization import TokenCounter, build_token_counter
from ragcore.models.chunk import Chunk, utc_now
from ragcore.observability.log_utils import short_hash

logger = logging.getLogger(__name__)

PARAGRAPH_SEPARATOR = "\n\n"
SENTENCE_SEPARATOR = " "


class DocumentChunker:
    """Split documents into chunks with configurable size, overlap and minimum."""

    def __init__(
        self,
        settings: ChunkingSettings | None = None,
        token_counter: TokenCounter | None = None,
    ) -> None:
        """
        Initialize chunker.

        Args:
            settings: Chunk size, overlap and minimum in tokens
            token_counter: Counting strategy (built from settings if None)
        """
        self._settings = settings or ChunkingSettings()
        self._counter = token_counter or build_token_counter(
            self._settings.tokenizer_mode,
            self._settings.tokenizer_encoding,
        )

    @property
    def settings(self) -> ChunkingSettings:
        return self._settings

    @property
    def token_counter(self) -> TokenCounter:
        return self._counter

    def chunk(self, content: str, source_id: str, source_name: str) -> list[Chunk]:
        """
        Chunk a document.

        Args:
            content: Document text
            source_id: Source document identifier
            source_name: Source document name

        Returns:
            list[Chunk]: Ordered chunks with contiguous indices, vectors unset

        Raises:
            InvalidArgumentError: When source_id or source_name is blank
        """
        if not content or not content.strip():
            logger.info(
                f"{__name__}:chunk - Empty content, no chunks produced",
                extra={"source_id": source_id},
            )
            return []
        if not source_id or not source_id.strip():
            raise InvalidArgumentError("source_id cannot be empty", field="source_id")
        if not source_name or not source_name.strip():
            raise InvalidArgumentError("source_name cannot be empty", field="source_name")

        size = self._settings.chunk_size_tokens
        total_tokens = self._counter.count_tokens(content)
        logger.info(
            f"{__name__}:chunk - START: content_length={len(content)}, "
            f"total_tokens={total_tokens}, tokenizer={self._counter.model_name}",
            extra={"source_id": source_id},
        )

        indexed_at = utc_now()
        if total_tokens <= size:
            chunk = Chunk.create(content, source_id, source_name, 0, indexed_at)
            logger.info(
                f"{__name__}:chunk - Document fits in single chunk "
                f"(chunk={short_hash(chunk.chunk_id)}, tokens={total_tokens})",
                extra={"source_id": source_id},
            )
            return [chunk]

        texts = self._split_paragraph_stream(split_paragraphs(content))
        if self._settings.min_chunk_tokens > 0:
            texts = self._merge_small(texts)

        chunks = [
            Chunk.create(text, source_id, source_name, index, indexed_at)
            for index, text in enumerate(texts)
        ]
        logger.info(
            f"{__name__}:chunk - SUCCESS: {len(chunks)} chunks, "
            f"ids={[short_hash(c.chunk_id) for c in chunks]}",
            extra={"source_id": source_id, "tokenizer": self._counter.model_name},
        )
        return chunks

    def _split_paragraph_stream(self, paragraphs: list[str]) -> list[str]:
        """Greedy paragraph accumulation with overlap; oversized buffers go sentence by sentence."""
        size = self._settings.chunk_size_tokens
        count = self._counter.count_tokens
        separator_tokens = count(PARAGRAPH_SEPARATOR)

        closed: list[str] = []
        buffer = ""
        # True while buffer holds nothing but the overlap copied from the last chunk
        seed_only = False

        for paragraph in paragraphs:
            if buffer and not seed_only and count(buffer) + separator_tokens + count(paragraph) > size:
                buffer = self._close(buffer, closed)
                seed_only = bool(buffer)

            combined = f"{buffer}{PARAGRAPH_SEPARATOR}{paragraph}" if buffer else paragraph
            if count(combined) <= size:
                buffer = combined
            else:
                buffer = self._split_oversized(buffer, seed_only, paragraph, closed)
            seed_only = False

        if buffer.strip():
            closed.append(buffer.strip())
        return closed

    def _split_oversized(
        self,
        prefix: str,
        prefix_is_seed: bool,
        paragraph: str,
        closed: list[str],
    ) -> str:
        """Sentence-level accumulation; returns the unfinished tail as the running buffer.

        An overlap seed is dropped rather than pushing a sentence over the budget.
        """
        size = self._settings.chunk_size_tokens
        count = self._counter.count_tokens
        space_tokens = count(SENTENCE_SEPARATOR)

        buffer = prefix
        seed_only = prefix_is_seed and bool(prefix)
        for sentence in split_sentences(paragraph, self._settings.sentence_split_mode):
            if buffer and count(buffer) + space_tokens + count(sentence) > size:
                if not seed_only:
                    buffer = self._close(buffer, closed)
                if buffer and count(buffer) + space_tokens + count(sentence) > size:
                    buffer = ""
            buffer = f"{buffer}{SENTENCE_SEPARATOR}{sentence}" if buffer else sentence
            seed_only = False
        return buffer

    def _close(self, buffer: str, closed: list[str]) -> str:
        """Emit buffer as a chunk and return the overlap that seeds the next one."""
        text = buffer.strip()
        if not text:
            return ""
        closed.append(text)
        if self._settings.overlap_tokens <= 0:
            return ""
        return get_overlap_text(text, self._settings.overlap_tokens, self._counter)

    def _merge_small(self, texts: list[str]) -> list[str]:
        """Merge chunks below min_chunk_tokens into the next one when the result still fits."""
        minimum = self._settings.min_chunk_tokens
        size = self._settings.chunk_size_tokens
        count = self._counter.count_tokens

        merged: list[str] = []
        i = 0
        while i < len(texts):
            current = texts[i]
            if count(current) < minimum and i < len(texts) - 1:
                candidate = f"{current}{PARAGRAPH_SEPARATOR}{texts[i + 1]}"
                if count(candidate) <= size:
                    merged.append(candidate)
                    i += 2
                    continue
            merged.append(current)
            i += 1

        if len(merged) != len(texts):
            logger.debug(f"{__name__}:_merge_small - Merged {len(texts)} chunks into {len(merged)}")
        return merged
