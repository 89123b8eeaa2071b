"""
Document ingestion orchestration.

Runs decode -> chunk -> embed -> index for one plain-text document and
reports the result as an IngestionRecord. Failures never escape as
exceptions: each one becomes a FAILED record with its reason.

Dependencies: ragcore.core.chunking, ragcore.boundary.embeddings, ragcore.boundary.vdb
System role: Ingestion pipeline orchestrator
"""

import logging
import time
from typing import BinaryIO, TextIO, Union

from ragcore.application.metadata_store import InMemoryDocumentMetadataStore
from ragcore.boundary.embeddings import EmbeddingClient
from ragcore.boundary.vdb import VectorStore
from ragcore.core.chunking import DocumentChunker
from ragcore.core.exceptions import DataIntegrityError, InvalidArgumentError, RagCoreException
from ragcore.models.ingestion import IngestionRecord, IngestionStatus
from ragcore.observability.correlation import ensure_correlation_id
from ragcore.observability.log_utils import log_exception_with_context
from ragcore.observability.metrics import (
    INGESTION_COMPLETED,
    INGESTION_FAILED,
    FailureSignals,
    get_signals,
)

logger = logging.getLogger(__name__)

DocumentSource = Union[str, bytes, BinaryIO, TextIO]


class IngestionService:
    """Ingest plain UTF-8 documents into the vector store."""

    def __init__(
        self,
        chunker: DocumentChunker,
        embedding_client: EmbeddingClient,
        vector_store: VectorStore,
        metadata_store: InMemoryDocumentMetadataStore | None = None,
        signals: FailureSignals | None = None,
    ) -> None:
        self._chunker = chunker
        self._embedding_client = embedding_client
        self._vector_store = vector_store
        self._metadata_store = metadata_store
        self._signals = signals or get_signals()

    async def ingest(
        self,
        document: DocumentSource,
        source_id: str,
        source_name: str,
        update_existing: bool = False,
    ) -> IngestionRecord:
        """
        Ingest one document.

        Args:
            document: Text, UTF-8 bytes or a readable stream
            source_id: Source document identifier (chunk ids derive from it)
            source_name: Source document name
            update_existing: Replace the previous version with the same source_name

        Returns:
            IngestionRecord: COMPLETED with the chunk count, or FAILED with the reason
        """
        ensure_correlation_id()
        started = time.perf_counter()
        logger.info(
            f"{__name__}:ingest - START",
            extra={
                "source_id": source_id,
                "source_name": source_name,
                "update_existing": update_existing,
            },
        )

        try:
            if not source_id or not source_id.strip():
                raise InvalidArgumentError("source_id cannot be empty", field="source_id")
            if not source_name or not source_name.strip():
                raise InvalidArgumentError("source_name cannot be empty", field="source_name")

            content = _read_text(document)
            if not content.strip():
                return self._fail(source_id, source_name, "Document content is empty")

            chunks = self._chunker.chunk(content, source_id, source_name)
            if not chunks:
                return self._fail(source_id, source_name, "No chunks created from document")

            vectors = await self._embedding_client.embed_many([c.content for c in chunks])
            if len(vectors) != len(chunks):
                raise DataIntegrityError(
                    f"Embedding count mismatch: expected {len(chunks)}, got {len(vectors)}",
                    source_id=source_id,
                )

            embedded = [chunk.with_vector(vector) for chunk, vector in zip(chunks, vectors)]
            await self._vector_store.add_documents(embedded)

            if update_existing:
                await self._replace_previous_version(source_id, source_name)

        except (RagCoreException, UnicodeDecodeError) as e:
            log_exception_with_context(
                logger,
                f"{__name__}:ingest - FAILED",
                e,
                source_id=source_id,
                source_name=source_name,
            )
            return self._fail(source_id, source_name, str(e))
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:ingest - Unexpected error",
                e,
                source_id=source_id,
                source_name=source_name,
            )
            return self._fail(source_id, source_name, f"{type(e).__name__}: {e}")

        record = IngestionRecord(
            source_id=source_id,
            source_name=source_name,
            chunk_count=len(embedded),
            status=IngestionStatus.COMPLETED,
        )
        if self._metadata_store is not None:
            self._metadata_store.store(record)

        self._signals.increment(INGESTION_COMPLETED)
        logger.info(
            f"{__name__}:ingest - SUCCESS: {record.chunk_count} chunks in "
            f"{(time.perf_counter() - started) * 1000:.0f}ms",
            extra={"source_id": source_id},
        )
        return record

    async def _replace_previous_version(self, source_id: str, source_name: str) -> None:
        """Delete chunks of the latest other version with this source_name.

        The metadata store deprecates that version when the new record is stored.
        """
        if self._metadata_store is None:
            return
        previous = self._metadata_store.get_latest_by_source_name(source_name)
        if previous is None or previous.document_id == source_id:
            return

        deleted = await self._vector_store.delete_by_source_id(previous.document_id)
        logger.info(
            f"{__name__}:_replace_previous_version - Replaced version {previous.version}",
            extra={
                "previous_version_id": previous.document_id,
                "deleted_chunks": deleted,
            },
        )

    def _fail(self, source_id: str, source_name: str, message: str) -> IngestionRecord:
        self._signals.increment(INGESTION_FAILED)
        return IngestionRecord.failed(source_id or "", source_name or "", message)


def _read_text(document: DocumentSource) -> str:
    """Decode the document as strict UTF-8."""
    if isinstance(document, str):
        return document
    if isinstance(document, (bytes, bytearray)):
        return bytes(document).decode("utf-8", errors="strict")
    data = document.read()
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="strict")
    return data
