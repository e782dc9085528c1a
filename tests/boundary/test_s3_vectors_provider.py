"""
Test suite for S3VectorsProvider.

Uses a mocked boto3 s3vectors client: no AWS calls are made.
Tests index creation, batched writes, query translation, ordered fetch,
filtered deletes, throttling retries and availability.

System role: Verification of the production vector provider
"""

from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from clarity_bridge.boundary.vdb.s3_vectors_provider import (
    S3VectorsProvider,
    to_s3_filter,
)
from clarity_bridge.boundary.vdb.vector_schemas import (
    VectorDocument,
    VectorMetadata,
    VectorSearchOptions,
)
from clarity_bridge.core.exceptions import (
    DimensionMismatchError,
    ProviderUnavailableError,
    VectorStoreError,
)


def _client_error(code: str, operation: str = "PutVectors") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


def _doc(doc_id: str, embedding: list[float] | None = None, content: str = "text", **metadata):
    metadata.setdefault("type", "knowledge")
    return VectorDocument(
        id=doc_id,
        content=content,
        embedding=embedding,
        metadata=VectorMetadata(**metadata),
    )


@pytest.fixture
def provider(fake_embeddings, mock_s3vectors_client: MagicMock) -> S3VectorsProvider:
    """Provide S3 provider over the mocked client with a 3-dimensional index."""
    return S3VectorsProvider(
        fake_embeddings,
        vectors_bucket="test-vectors",
        index_name="test-index",
        dimension=3,
        ready_timeout_s=0.1,
        ready_poll_s=0.0,
        client=mock_s3vectors_client,
    )


class TestToS3Filter:
    """Test suite for filter translation."""

    def test_empty_filter_should_translate_to_none(self) -> None:
        assert to_s3_filter(None) is None
        assert to_s3_filter({}) is None

    def test_scalar_should_become_eq(self) -> None:
        assert to_s3_filter({"team_id": "t1"}) == {"teamId": {"$eq": "t1"}}

    def test_list_should_become_in(self) -> None:
        assert to_s3_filter({"type": ["context", "knowledge"]}) == {
            "type": {"$in": ["context", "knowledge"]}
        }

    def test_multiple_keys_should_be_anded(self) -> None:
        assert to_s3_filter({"teamId": "t1", "type": "knowledge"}) == {
            "$and": [{"teamId": {"$eq": "t1"}}, {"type": {"$eq": "knowledge"}}]
        }


class TestS3ProviderInitialize:
    """Test suite for index initialization."""

    @pytest.mark.asyncio
    async def test_existing_index_should_not_be_created(
        self, provider: S3VectorsProvider, mock_s3vectors_client: MagicMock
    ) -> None:
        await provider.initialize()
        await provider.initialize()

        mock_s3vectors_client.create_index.assert_not_called()
        mock_s3vectors_client.get_index.assert_called_once_with(
            vectorBucketName="test-vectors", indexName="test-index"
        )

    @pytest.mark.asyncio
    async def test_missing_index_should_be_created_with_cosine_metric(
        self, provider: S3VectorsProvider, mock_s3vectors_client: MagicMock
    ) -> None:
        mock_s3vectors_client.get_index.side_effect = [
            _client_error("NotFoundException", "GetIndex"),
            {"index": {"indexName": "test-index"}},
        ]

        await provider.initialize()

        kwargs = mock_s3vectors_client.create_index.call_args.kwargs
        assert kwargs["dimension"] == 3
        assert kwargs["distanceMetric"] == "cosine"
        assert kwargs["dataType"] == "float32"

    @pytest.mark.asyncio
    async def test_initialize_without_bucket_should_raise(self, fake_embeddings) -> None:
        provider = S3VectorsProvider(fake_embeddings, vectors_bucket=None, client=MagicMock())

        with pytest.raises(ProviderUnavailableError):
            await provider.initialize()


class TestS3ProviderUpsert:
    """Test suite for S3VectorsProvider.upsert."""

    @pytest.mark.asyncio
    async def test_upsert_should_write_in_batches_of_100(
        self, provider: S3VectorsProvider, mock_s3vectors_client: MagicMock
    ) -> None:
        docs = [_doc(f"d{i}", [1.0, 0.0, 0.0]) for i in range(250)]

        await provider.upsert(docs)

        batches = [c.kwargs["vectors"] for c in mock_s3vectors_client.put_vectors.call_args_list]
        assert [len(b) for b in batches] == [100, 100, 50]

    @pytest.mark.asyncio
    async def test_upsert_should_store_truncated_content_and_iso_timestamp(
        self, provider: S3VectorsProvider, mock_s3vectors_client: MagicMock
    ) -> None:
        await provider.upsert([_doc("a", [1.0, 0.0, 0.0], content="x" * 1500, teamId="t1")])

        entry = mock_s3vectors_client.put_vectors.call_args.kwargs["vectors"][0]
        assert entry["key"] == "a"
        assert entry["data"] == {"float32": [1.0, 0.0, 0.0]}
        assert len(entry["metadata"]["content"]) == 1000
        assert entry["metadata"]["teamId"] == "t1"
        assert isinstance(entry["metadata"]["createdAt"], str)
        assert "userId" not in entry["metadata"]

    @pytest.mark.asyncio
    async def test_upsert_should_batch_embed_missing_vectors(
        self, provider: S3VectorsProvider, fake_embeddings
    ) -> None:
        await provider.upsert([_doc("a", content="one"), _doc("b", [0.0, 1.0, 0.0]), _doc("c", content="two")])

        assert fake_embeddings.embed_many_calls == [["one", "two"]]

    @pytest.mark.asyncio
    async def test_upsert_should_reject_wrong_dimension(self, provider: S3VectorsProvider) -> None:
        with pytest.raises(DimensionMismatchError):
            await provider.upsert([_doc("a", [1.0, 0.0])])

    @pytest.mark.asyncio
    async def test_empty_upsert_should_make_no_calls(
        self, provider: S3VectorsProvider, mock_s3vectors_client: MagicMock
    ) -> None:
        await provider.upsert([])

        mock_s3vectors_client.put_vectors.assert_not_called()


class TestS3ProviderSearch:
    """Test suite for S3VectorsProvider.search."""

    @pytest.mark.asyncio
    async def test_search_should_convert_distance_to_similarity(
        self, provider: S3VectorsProvider, mock_s3vectors_client: MagicMock
    ) -> None:
        mock_s3vectors_client.query_vectors.return_value = {
            "vectors": [
                {"key": "far", "distance": 0.6, "metadata": {"type": "knowledge", "content": "far"}},
                {"key": "near", "distance": 0.1, "metadata": {"type": "knowledge", "content": "near"}},
            ]
        }

        results = await provider.search([1.0, 0.0, 0.0], VectorSearchOptions(top_k=5))

        assert [r.id for r in results] == ["near", "far"]
        assert results[0].score == pytest.approx(0.9)
        assert results[0].content == "near"
        assert results[0].metadata.type == "knowledge"

    @pytest.mark.asyncio
    async def test_search_should_send_translated_filter_and_top_k(
        self, provider: S3VectorsProvider, mock_s3vectors_client: MagicMock
    ) -> None:
        await provider.search(
            [1.0, 0.0, 0.0],
            VectorSearchOptions(top_k=4, filter={"teamId": "t1"}),
        )

        kwargs = mock_s3vectors_client.query_vectors.call_args.kwargs
        assert kwargs["topK"] == 4
        assert kwargs["filter"] == {"teamId": {"$eq": "t1"}}
        assert kwargs["queryVector"] == {"float32": [1.0, 0.0, 0.0]}

    @pytest.mark.asyncio
    async def test_search_should_apply_min_score(
        self, provider: S3VectorsProvider, mock_s3vectors_client: MagicMock
    ) -> None:
        mock_s3vectors_client.query_vectors.return_value = {
            "vectors": [
                {"key": "near", "distance": 0.1, "metadata": {"type": "knowledge"}},
                {"key": "far", "distance": 0.9, "metadata": {"type": "knowledge"}},
            ]
        }

        results = await provider.search([1.0, 0.0, 0.0], VectorSearchOptions(min_score=0.5))

        assert [r.id for r in results] == ["near"]


class TestS3ProviderFetchAndDelete:
    """Test suite for fetch, delete and delete_by_filter."""

    @pytest.mark.asyncio
    async def test_fetch_should_follow_request_order(
        self, provider: S3VectorsProvider, mock_s3vectors_client: MagicMock
    ) -> None:
        mock_s3vectors_client.get_vectors.return_value = {
            "vectors": [
                {"key": "a", "data": {"float32": [1.0, 0.0, 0.0]}, "metadata": {"type": "knowledge", "content": "A"}},
                {"key": "b", "data": {"float32": [0.0, 1.0, 0.0]}, "metadata": {"type": "knowledge", "content": "B"}},
            ]
        }

        found = await provider.fetch(["b", "missing", "a"])

        assert [d.id for d in found] == ["b", "a"]
        assert found[0].embedding == [0.0, 1.0, 0.0]
        assert found[0].content == "B"

    @pytest.mark.asyncio
    async def test_delete_by_filter_should_list_pages_and_delete_matches(
        self, provider: S3VectorsProvider, mock_s3vectors_client: MagicMock
    ) -> None:
        mock_s3vectors_client.list_vectors.side_effect = [
            {
                "vectors": [
                    {"key": "s1", "metadata": {"type": "specification", "specificationId": "spec-1"}},
                    {"key": "s2", "metadata": {"type": "specification", "specificationId": "spec-2"}},
                ],
                "nextToken": "page-2",
            },
            {"vectors": [{"key": "s3", "metadata": {"type": "specification", "specificationId": "spec-1"}}]},
        ]

        await provider.delete_by_filter({"specification_id": "spec-1"})

        assert mock_s3vectors_client.list_vectors.call_args_list[1].kwargs["nextToken"] == "page-2"
        mock_s3vectors_client.delete_vectors.assert_called_once()
        assert mock_s3vectors_client.delete_vectors.call_args.kwargs["keys"] == ["s1", "s3"]


class TestS3ProviderErrors:
    """Test suite for retry and error wrapping."""

    @pytest.mark.asyncio
    async def test_throttling_should_be_retried(
        self, provider: S3VectorsProvider, mock_s3vectors_client: MagicMock
    ) -> None:
        mock_s3vectors_client.put_vectors.side_effect = [
            _client_error("ThrottlingException"),
            {},
        ]

        with patch.object(S3VectorsProvider._invoke.retry, "sleep", MagicMock()):
            await provider.upsert([_doc("a", [1.0, 0.0, 0.0])])

        assert mock_s3vectors_client.put_vectors.call_count == 2

    @pytest.mark.asyncio
    async def test_other_client_errors_should_raise_vector_store_error(
        self, provider: S3VectorsProvider, mock_s3vectors_client: MagicMock
    ) -> None:
        mock_s3vectors_client.put_vectors.side_effect = _client_error("AccessDeniedException")

        with pytest.raises(VectorStoreError) as exc_info:
            await provider.upsert([_doc("a", [1.0, 0.0, 0.0])])

        assert exc_info.value.details["operation"] == "put_vectors"
        assert exc_info.value.details["error_code"] == "AccessDeniedException"
        assert mock_s3vectors_client.put_vectors.call_count == 1

    @pytest.mark.asyncio
    async def test_is_available_should_be_false_without_bucket(self, fake_embeddings) -> None:
        provider = S3VectorsProvider(fake_embeddings, vectors_bucket=None, client=MagicMock())

        assert await provider.is_available() is False

    @pytest.mark.asyncio
    async def test_is_available_should_swallow_client_failures(
        self, provider: S3VectorsProvider, mock_s3vectors_client: MagicMock
    ) -> None:
        mock_s3vectors_client.get_index.side_effect = _client_error("AccessDeniedException", "GetIndex")

        assert await provider.is_available() is False
