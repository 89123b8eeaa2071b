"""
In-memory document metadata store.

Tracks ingested documents and their versions per source name. A new
version of a source name deprecates the previous latest version. Data is
lost on restart.

Dependencies: ragcore.models.ingestion, threading (stdlib)
System role: Document version tracking for re-ingestion
"""

import logging
import threading

from ragcore.models.ingestion import DocumentMetadata, IngestionRecord

logger = logging.getLogger(__name__)


class InMemoryDocumentMetadataStore:
    """Thread-safe document metadata registry."""

    def __init__(self) -> None:
        self._documents: dict[str, DocumentMetadata] = {}
        self._lock = threading.Lock()

    def store(self, record: IngestionRecord) -> DocumentMetadata:
        """
        Register an ingestion result as the newest version of its source name.

        Args:
            record: Ingestion result

        Returns:
            DocumentMetadata: Stored metadata
        """
        with self._lock:
            same_name = [d for d in self._documents.values() if d.source_name == record.source_name]
            previous = self._latest(record.source_name, exclude_id=record.source_id)
            version = max((d.version for d in same_name), default=0) + 1

            if previous is not None:
                self._documents[previous.document_id] = previous.model_copy(
                    update={"is_deprecated": True}
                )

            metadata = DocumentMetadata(
                document_id=record.source_id,
                source_name=record.source_name,
                chunk_count=record.chunk_count,
                indexed_at=record.completed_at,
                status=record.status,
                version=version,
                previous_version_id=previous.document_id if previous else None,
            )
            self._documents[record.source_id] = metadata

        logger.info(
            f"{__name__}:store - Stored version {version}",
            extra={"document_id": record.source_id, "source_name": record.source_name},
        )
        return metadata

    def get_all(self) -> list[DocumentMetadata]:
        """Non-deprecated documents, most recently indexed first."""
        with self._lock:
            documents = [d for d in self._documents.values() if not d.is_deprecated]
        return sorted(documents, key=lambda d: d.indexed_at, reverse=True)

    def get_by_id(self, document_id: str) -> DocumentMetadata | None:
        with self._lock:
            return self._documents.get(document_id)

    def get_latest_by_source_name(self, source_name: str) -> DocumentMetadata | None:
        with self._lock:
            return self._latest(source_name)

    def deprecate_version(self, document_id: str) -> None:
        with self._lock:
            metadata = self._documents.get(document_id)
            if metadata is not None:
                self._documents[document_id] = metadata.model_copy(update={"is_deprecated": True})

    def _latest(self, source_name: str, exclude_id: str | None = None) -> DocumentMetadata | None:
        candidates = [
            d
            for d in self._documents.values()
            if d.source_name == source_name and not d.is_deprecated and d.document_id != exclude_id
        ]
        return max(candidates, key=lambda d: d.version, default=None)
