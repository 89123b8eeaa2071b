"""
Test suite for S3VectorsStore.

Mocks the boto3 's3vectors' client to verify request shapes, batching,
distance-to-score mapping and exact-match deletion.

System role: Verification of the managed vector store backend
"""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from conftest import TEST_DIMENSION, unit_vector
from ragcore.boundary.vdb import S3VectorsStore
from ragcore.configs import SimilarityMetric
from ragcore.core.exceptions import ProviderUnavailableError
from ragcore.models import Chunk


def client_error(code: str, operation: str = "CreateIndex") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


def make_store(client: MagicMock, metric: SimilarityMetric = SimilarityMetric.COSINE) -> S3VectorsStore:
    return S3VectorsStore(
        vectors_bucket="test-bucket",
        index_name="test-index",
        client=client,
        dimension=TEST_DIMENSION,
        metric=metric,
    )


def embedded_chunks(source_id: str, count: int) -> list[Chunk]:
    return [
        Chunk.create(f"text {i}", source_id, "doc.txt", i).with_vector(unit_vector(i % TEST_DIMENSION))
        for i in range(count)
    ]


@pytest.fixture
def client() -> MagicMock:
    """Provide mocked s3vectors client."""
    mock = MagicMock()
    mock.query_vectors.return_value = {"vectors": []}
    mock.list_vectors.return_value = {"vectors": []}
    return mock


class TestS3VectorsStoreInitialize:
    """Test suite for index creation."""

    @pytest.mark.asyncio
    async def test_ensure_initialized_should_create_index_with_metric(self, client: MagicMock) -> None:
        """Test create_index receives dimension, metric and non-filterable content."""
        store = make_store(client, SimilarityMetric.EUCLIDEAN)

        await store.ensure_initialized()

        kwargs = client.create_index.call_args.kwargs
        assert kwargs["vectorBucketName"] == "test-bucket"
        assert kwargs["indexName"] == "test-index"
        assert kwargs["dimension"] == TEST_DIMENSION
        assert kwargs["distanceMetric"] == "euclidean"
        assert kwargs["metadataConfiguration"] == {"nonFilterableMetadataKeys": ["content"]}

    @pytest.mark.asyncio
    async def test_dot_product_should_use_cosine_index(self, client: MagicMock) -> None:
        """Test dot_product is served by a cosine index."""
        store = make_store(client, SimilarityMetric.DOT_PRODUCT)

        await store.ensure_initialized()

        assert client.create_index.call_args.kwargs["distanceMetric"] == "cosine"

    @pytest.mark.asyncio
    async def test_ensure_initialized_should_tolerate_existing_index(self, client: MagicMock) -> None:
        """Test ConflictException from create_index is treated as success."""
        client.create_index.side_effect = client_error("ConflictException")
        store = make_store(client)

        await store.ensure_initialized()
        await store.ensure_initialized()

        assert client.create_index.call_count == 1

    @pytest.mark.asyncio
    async def test_ensure_initialized_should_raise_on_other_errors(self, client: MagicMock) -> None:
        """Test other client errors become ProviderUnavailableError and allow a retry later."""
        client.create_index.side_effect = client_error("ServiceUnavailableException")
        store = make_store(client)

        with pytest.raises(ProviderUnavailableError):
            await store.ensure_initialized()

        client.create_index.side_effect = None
        await store.ensure_initialized()
        assert client.create_index.call_count == 2


class TestS3VectorsStoreWrites:
    """Test suite for put_vectors batching."""

    @pytest.mark.asyncio
    async def test_add_documents_should_cap_batches_at_one_hundred(self, client: MagicMock) -> None:
        """Test 250 chunks are written in three put_vectors calls."""
        store = S3VectorsStore(
            vectors_bucket="test-bucket",
            index_name="test-index",
            client=client,
            dimension=TEST_DIMENSION,
            batch_size=500,
        )

        await store.add_documents(embedded_chunks("doc-1", 250))

        sizes = [len(call.kwargs["vectors"]) for call in client.put_vectors.call_args_list]
        assert sizes == [100, 100, 50]

    @pytest.mark.asyncio
    async def test_add_documents_should_send_metadata(self, client: MagicMock) -> None:
        """Test vector key is the chunk id and chunk fields travel as metadata."""
        store = make_store(client)
        chunk = embedded_chunks("doc-1", 1)[0]

        await store.add_documents([chunk])

        vector = client.put_vectors.call_args.kwargs["vectors"][0]
        assert vector["key"] == "doc-1-chunk-0"
        assert vector["data"] == {"float32": unit_vector(0)}
        assert vector["metadata"]["source_id"] == "doc-1"
        assert vector["metadata"]["content"] == "text 0"
        assert vector["metadata"]["indexed_at"] == chunk.indexed_at.isoformat()

    @pytest.mark.asyncio
    async def test_add_documents_should_map_transport_errors(self, client: MagicMock) -> None:
        """Test botocore connection failures become ProviderUnavailableError."""
        client.put_vectors.side_effect = EndpointConnectionError(endpoint_url="https://s3vectors")
        store = make_store(client)

        with pytest.raises(ProviderUnavailableError):
            await store.add_documents(embedded_chunks("doc-1", 1))


class TestS3VectorsStoreSearch:
    """Test suite for query_vectors result mapping."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "metric, distance, expected",
        [
            (SimilarityMetric.COSINE, 0.0, 1.0),
            (SimilarityMetric.COSINE, 1.0, 0.5),
            (SimilarityMetric.DOT_PRODUCT, 0.25, 0.75),
            (SimilarityMetric.EUCLIDEAN, 1.0, 0.5),
        ],
    )
    async def test_search_should_map_distance_to_score(
        self, client: MagicMock, metric: SimilarityMetric, distance: float, expected: float
    ) -> None:
        """Test returned distances become similarity scores per metric."""
        client.query_vectors.return_value = {
            "vectors": [
                {
                    "key": "doc-1-chunk-0",
                    "distance": distance,
                    "metadata": {
                        "source_id": "doc-1",
                        "source_name": "doc.txt",
                        "chunk_index": 0,
                        "indexed_at": "2026-01-01T00:00:00+00:00",
                        "content": "hello",
                    },
                }
            ]
        }
        store = make_store(client, metric)

        results = await store.search(unit_vector(0), 5)

        assert results[0].score == pytest.approx(expected)
        assert results[0].chunk.content == "hello"
        assert results[0].chunk.indexed_at.year == 2026
        kwargs = client.query_vectors.call_args.kwargs
        assert kwargs["topK"] == 5
        assert kwargs["returnDistance"] is True
        assert kwargs["returnMetadata"] is True


class TestS3VectorsStoreDelete:
    """Test suite for exact-match deletion by source."""

    @pytest.mark.asyncio
    async def test_delete_should_page_and_match_source_exactly(self, client: MagicMock) -> None:
        """Test only 'doc-1' keys are deleted, never those of 'doc-10'."""
        client.list_vectors.side_effect = [
            {
                "vectors": [
                    {"key": "doc-1-chunk-0", "metadata": {"source_id": "doc-1"}},
                    {"key": "doc-10-chunk-0", "metadata": {"source_id": "doc-10"}},
                ],
                "nextToken": "page-2",
            },
            {"vectors": [{"key": "doc-1-chunk-1", "metadata": {"source_id": "doc-1"}}]},
        ]
        store = make_store(client)

        deleted = await store.delete_by_source_id("doc-1")

        assert deleted == 2
        assert client.list_vectors.call_args_list[1].kwargs["nextToken"] == "page-2"
        client.delete_vectors.assert_called_once()
        assert client.delete_vectors.call_args.kwargs["keys"] == ["doc-1-chunk-0", "doc-1-chunk-1"]

    @pytest.mark.asyncio
    async def test_delete_should_be_noop_when_nothing_matches(self, client: MagicMock) -> None:
        """Test unknown sources issue no delete_vectors call."""
        store = make_store(client)

        assert await store.delete_by_source_id("missing") == 0
        client.delete_vectors.assert_not_called()
