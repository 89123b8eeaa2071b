"""
S3 Vectors store for production retrieval.

Stores chunk vectors in an Amazon S3 Vectors index through the boto3
's3vectors' client. Chunk fields travel as vector metadata; 'content' is
non-filterable. boto3 is synchronous, so every call runs in a worker
thread.

S3 Vectors offers cosine and euclidean indexes only. dot_product is served
by a cosine index, which equals the inner product for unit-normalized
embeddings.

Metadata keys:
- Filterable: source_id, source_name, chunk_index, indexed_at
- Non-filterable: content

Dependencies: boto3, botocore, ragcore.boundary.vdb.base
System role: Production vector store (S3 Vectors)
"""

import asyncio
import logging
from datetime import datetime
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ragcore.boundary.vdb.base import VectorStore
from ragcore.boundary.vdb.scoring import distance_to_score
from ragcore.configs.vector_store import SimilarityMetric
from ragcore.core.exceptions import ProviderUnavailableError
from ragcore.models.chunk import Chunk
from ragcore.models.search import SearchResult

logger = logging.getLogger(__name__)

MAX_PUT_BATCH = 100
LIST_PAGE_SIZE = 500
NON_FILTERABLE_KEYS = ["content"]

_INDEX_METRIC = {
    SimilarityMetric.COSINE: "cosine",
    SimilarityMetric.DOT_PRODUCT: "cosine",
    SimilarityMetric.EUCLIDEAN: "euclidean",
}


class S3VectorsStore(VectorStore):
    """Amazon S3 Vectors backend."""

    provider_name = "s3_vectors"
    max_batch_size = MAX_PUT_BATCH

    def __init__(
        self,
        vectors_bucket: str,
        index_name: str,
        region: str = "us-east-1",
        client: Any | None = None,
        **kwargs,
    ) -> None:
        """
        Initialize S3 Vectors store.

        Args:
            vectors_bucket: S3 Vectors bucket name
            index_name: Index name within the bucket
            region: AWS region for S3 Vectors
            client: Pre-built boto3 's3vectors' client (created if None)
            **kwargs: dimension, metric, batch_size and policies for VectorStore
        """
        super().__init__(**kwargs)
        self._vectors_bucket = vectors_bucket
        self._index_name = index_name
        self._region = region
        self._client = client or boto3.client("s3vectors", region_name=region)

        if self.metric == SimilarityMetric.DOT_PRODUCT:
            logger.warning(
                f"{__name__}:__init__ - dot_product is served by a cosine index on S3 Vectors",
                extra={"index_name": index_name},
            )
        logger.info(
            f"{__name__}:__init__ - bucket={vectors_bucket}, index={index_name}, region={region}"
        )

    async def _initialize(self) -> None:
        try:
            await asyncio.to_thread(
                self._client.create_index,
                vectorBucketName=self._vectors_bucket,
                indexName=self._index_name,
                dataType="float32",
                dimension=self.dimension,
                distanceMetric=_INDEX_METRIC[self.metric],
                metadataConfiguration={"nonFilterableMetadataKeys": NON_FILTERABLE_KEYS},
            )
            logger.info(f"{__name__}:_initialize - Created index {self._index_name}")
        except ClientError as e:
            if _error_code(e) in ("ConflictException", "ResourceAlreadyExistsException"):
                logger.info(f"{__name__}:_initialize - Index {self._index_name} already exists")
                return
            raise self._unavailable(e, "create_index") from e
        except BotoCoreError as e:
            raise self._unavailable(e, "create_index") from e

    async def _upsert_batch(self, chunks: list[Chunk]) -> None:
        vectors = [
            {
                "key": chunk.chunk_id,
                "data": {"float32": [float(x) for x in chunk.vector]},
                "metadata": _to_metadata(chunk),
            }
            for chunk in chunks
        ]
        try:
            await asyncio.to_thread(
                self._client.put_vectors,
                vectorBucketName=self._vectors_bucket,
                indexName=self._index_name,
                vectors=vectors,
            )
        except (ClientError, BotoCoreError) as e:
            raise self._unavailable(e, "put_vectors") from e

    async def _query(self, query_vector: list[float], top_k: int) -> list[SearchResult]:
        try:
            response = await asyncio.to_thread(
                self._client.query_vectors,
                vectorBucketName=self._vectors_bucket,
                indexName=self._index_name,
                queryVector={"float32": [float(x) for x in query_vector]},
                topK=top_k,
                returnDistance=True,
                returnMetadata=True,
            )
        except (ClientError, BotoCoreError) as e:
            raise self._unavailable(e, "query_vectors") from e

        results = []
        for item in response.get("vectors", []):
            score = distance_to_score(
                self.metric,
                float(item.get("distance", 0.0)),
                dot_product_as_cosine=True,
            )
            results.append(
                SearchResult(chunk=_from_metadata(item["key"], item.get("metadata", {})), score=score)
            )
        return results

    async def _delete_source(self, source_id: str) -> int:
        keys = await self._list_keys_for_source(source_id)
        for start in range(0, len(keys), MAX_PUT_BATCH):
            try:
                await asyncio.to_thread(
                    self._client.delete_vectors,
                    vectorBucketName=self._vectors_bucket,
                    indexName=self._index_name,
                    keys=keys[start:start + MAX_PUT_BATCH],
                )
            except (ClientError, BotoCoreError) as e:
                raise self._unavailable(e, "delete_vectors") from e
        return len(keys)

    async def _list_keys_for_source(self, source_id: str) -> list[str]:
        """Page through the index and collect keys whose source_id matches exactly."""
        keys: list[str] = []
        next_token: str | None = None
        while True:
            request: dict[str, Any] = {
                "vectorBucketName": self._vectors_bucket,
                "indexName": self._index_name,
                "maxResults": LIST_PAGE_SIZE,
                "returnMetadata": True,
            }
            if next_token:
                request["nextToken"] = next_token
            try:
                response = await asyncio.to_thread(self._client.list_vectors, **request)
            except (ClientError, BotoCoreError) as e:
                raise self._unavailable(e, "list_vectors") from e

            for item in response.get("vectors", []):
                if (item.get("metadata") or {}).get("source_id") == source_id:
                    keys.append(item["key"])
            next_token = response.get("nextToken")
            if not next_token:
                return keys

    def _unavailable(self, exc: Exception, operation: str) -> ProviderUnavailableError:
        logger.error(
            f"{__name__}:{operation} - {type(exc).__name__}: {exc}",
            extra={"index_name": self._index_name},
        )
        return ProviderUnavailableError(
            f"S3 Vectors {operation} failed: {_error_code(exc) or type(exc).__name__}",
            provider=self.provider_name,
            operation=operation,
        )


def _error_code(exc: Exception) -> str:
    if isinstance(exc, ClientError):
        return exc.response.get("Error", {}).get("Code", "")
    return ""


def _to_metadata(chunk: Chunk) -> dict[str, Any]:
    return {
        "source_id": chunk.source_id,
        "source_name": chunk.source_name,
        "chunk_index": chunk.chunk_index,
        "indexed_at": chunk.indexed_at.isoformat(),
        "content": chunk.content,
    }


def _from_metadata(key: str, metadata: dict[str, Any]) -> Chunk:
    indexed_at = metadata.get("indexed_at")
    fields: dict[str, Any] = {
        "chunk_id": key,
        "chunk_index": int(metadata.get("chunk_index", 0)),
        "content": metadata.get("content", ""),
        "source_id": metadata.get("source_id", ""),
        "source_name": metadata.get("source_name", ""),
    }
    if indexed_at:
        fields["indexed_at"] = datetime.fromisoformat(indexed_at)
    return Chunk(**fields)
