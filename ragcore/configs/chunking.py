"""
Chunking configuration settings.

Token budgets for chunk size, overlap and small-chunk merging, plus the
tokenizer and sentence splitting strategy.

Dependencies: pydantic, pydantic_settings
System role: Chunker configuration
"""

from enum import Enum

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TokenizerMode(str, Enum):
    """Token counting strategy."""

    APPROXIMATE = "approximate"
    EXACT = "exact"


class SentenceSplitMode(str, Enum):
    """Sentence boundary heuristic used for oversized paragraphs."""

    BASIC = "basic"
    IMPROVED = "improved"


class ChunkingSettings(BaseSettings):
    """Chunker configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CHUNKING_",
        case_sensitive=False,
        extra="ignore",
    )

    chunk_size_tokens: int = Field(default=800, gt=0, description="Maximum chunk size in tokens")
    overlap_tokens: int = Field(
        default=100,
        ge=0,
        description="Tokens shared between the tail of a chunk and the head of the next",
    )
    min_chunk_tokens: int = Field(
        default=50,
        ge=0,
        description="Chunks below this size are merged with the next chunk (0 disables)",
    )
    tokenizer_mode: TokenizerMode = Field(
        default=TokenizerMode.APPROXIMATE,
        description="'approximate' (4 chars per token) or 'exact' (tiktoken encoding)",
    )
    tokenizer_encoding: str = Field(
        default="cl100k_base",
        description="tiktoken encoding used when tokenizer_mode is 'exact'",
    )
    sentence_split_mode: SentenceSplitMode = Field(
        default=SentenceSplitMode.BASIC,
        description="'basic' punctuation split or 'improved' abbreviation-aware split",
    )

    @model_validator(mode="after")
    def _check_overlap(self) -> "ChunkingSettings":
        if self.overlap_tokens >= self.chunk_size_tokens:
            raise ValueError("overlap_tokens must be smaller than chunk_size_tokens")
        return self
