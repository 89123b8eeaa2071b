"""
Ingestion boundary models.

IngestionRecord is returned to the ingestion caller; DocumentMetadata
tracks ingested documents and their versions.

Dependencies: pydantic
System role: Ingestion result data structures
"""

import enum
from datetime import datetime

from pydantic import BaseModel, Field

from ragcore.models.chunk import utc_now


class IngestionStatus(str, enum.Enum):
    """Ingestion outcome."""

    COMPLETED = "completed"
    FAILED = "failed"


class IngestionRecord(BaseModel):
    """Result of one ingestion run."""

    source_id: str = Field(description="Source document identifier")
    source_name: str = Field(description="Source document name")
    chunk_count: int = Field(default=0, ge=0, description="Number of chunks indexed")
    status: IngestionStatus = Field(description="completed or failed")
    completed_at: datetime = Field(default_factory=utc_now, description="Completion time (UTC)")
    error_message: str | None = Field(default=None, description="Failure reason")

    @classmethod
    def failed(
        cls,
        source_id: str,
        source_name: str,
        error_message: str,
        chunk_count: int = 0,
    ) -> "IngestionRecord":
        return cls(
            source_id=source_id,
            source_name=source_name,
            chunk_count=chunk_count,
            status=IngestionStatus.FAILED,
            error_message=error_message,
        )


class DocumentMetadata(BaseModel):
    """Metadata for an ingested document version."""

    document_id: str = Field(description="Document identifier (source_id)")
    source_name: str = Field(description="Source document name")
    chunk_count: int = Field(ge=0, description="Number of chunks")
    indexed_at: datetime = Field(description="When the version was indexed")
    status: IngestionStatus = Field(description="Ingestion status")
    version: int = Field(default=1, ge=1, description="Version number per source name")
    previous_version_id: str | None = Field(default=None, description="Replaced document id")
    is_deprecated: bool = Field(default=False, description="Superseded by a newer version")
