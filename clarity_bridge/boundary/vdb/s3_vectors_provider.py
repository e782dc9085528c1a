"""
S3 Vectors provider for production retrieval.

Remote indexed vector store on Amazon S3 Vectors. The index uses the cosine
distance metric; S3 Vectors reports distance, so scores are returned as
1 - distance to stay comparable with the in-memory provider.

Metadata layout (per vector):
- Filterable: type, userId, teamId, specificationId, title, tags, createdAt, extras
- Non-filterable: content (truncated to 1000 characters)

Dependencies: boto3, botocore, tenacity, clarity_bridge.boundary.vdb
System role: Production vector provider (S3 Vectors)
"""

import asyncio
import logging
import time
from collections.abc import Sequence
from datetime import datetime
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from clarity_bridge.boundary.llm.embedding_source import EmbeddingSource
from clarity_bridge.boundary.vdb.similarity import matches_filter
from clarity_bridge.boundary.vdb.vector_provider import VectorProvider
from clarity_bridge.boundary.vdb.vector_schemas import (
    VectorDocument,
    VectorMetadata,
    VectorSearchOptions,
    VectorSearchResult,
    normalize_filter,
)
from clarity_bridge.core.exceptions import (
    DimensionMismatchError,
    ProviderUnavailableError,
    VectorStoreError,
)

logger = logging.getLogger(__name__)

BATCH_SIZE = 100
CONTENT_LIMIT = 1000
CONTENT_KEY = "content"
THROTTLING_CODES = frozenset(
    {"ThrottlingException", "TooManyRequestsException", "ServiceUnavailableException"}
)


def _is_throttling(exc: BaseException) -> bool:
    if not isinstance(exc, ClientError):
        return False
    return exc.response.get("Error", {}).get("Code") in THROTTLING_CODES


def _error_code(exc: ClientError) -> str:
    return exc.response.get("Error", {}).get("Code", "")


def to_s3_filter(filter_: dict[str, Any] | None) -> dict[str, Any] | None:
    """
    Translate the shared filter law to the S3 Vectors filter language.

    Scalars become $eq, collections become $in, several keys are $and-ed.
    """
    clauses = []
    for key, value in normalize_filter(filter_).items():
        if isinstance(value, (list, tuple, set, frozenset)):
            clauses.append({key: {"$in": list(value)}})
        else:
            clauses.append({key: {"$eq": value}})

    if not clauses:
        return None
    if len(clauses) == 1:
        return clauses[0]
    return {"$and": clauses}


def _to_s3_metadata(doc: VectorDocument) -> dict[str, Any]:
    metadata: dict[str, Any] = {}
    for key, value in doc.metadata.as_filterable().items():
        if value is None:
            continue
        if isinstance(value, datetime):
            value = value.isoformat()
        metadata[key] = value
    metadata[CONTENT_KEY] = doc.content[:CONTENT_LIMIT]
    return metadata


def _from_s3_metadata(raw: dict[str, Any] | None) -> tuple[str, VectorMetadata | None]:
    if not raw:
        return "", None
    payload = dict(raw)
    content = payload.pop(CONTENT_KEY, "")
    if "type" not in payload:
        return content, None
    return content, VectorMetadata.model_validate(payload)


class S3VectorsProvider(VectorProvider):
    """
    Amazon S3 Vectors provider.

    boto3 is synchronous, so every API call runs in a worker thread.
    Throttling responses are retried with exponential backoff; any other
    client error surfaces as VectorStoreError.
    """

    name = "s3"

    def __init__(
        self,
        embedding_source: EmbeddingSource,
        vectors_bucket: str | None,
        index_name: str = "clarity-bridge",
        region: str = "us-east-1",
        dimension: int = 1536,
        ready_timeout_s: float = 60.0,
        ready_poll_s: float = 2.0,
        client: Any | None = None,
    ) -> None:
        """
        Args:
            embedding_source: Used for documents upserted without an embedding
            vectors_bucket: S3 Vectors bucket; the provider is unavailable without it
            index_name: Index name within the bucket
            region: AWS region
            dimension: Index dimension
            ready_timeout_s: Maximum wait for a freshly created index
            ready_poll_s: Poll interval while waiting
            client: Pre-built s3vectors client (tests inject a stub)
        """
        self._embedding_source = embedding_source
        self._vectors_bucket = vectors_bucket
        self._index_name = index_name
        self._region = region
        self._dimension = dimension
        self._ready_timeout_s = ready_timeout_s
        self._ready_poll_s = ready_poll_s
        self._client = client
        self._initialized = False

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    @retry(
        retry=retry_if_exception(_is_throttling),
        stop=stop_after_attempt(5),
        wait=wait_exponential_jitter(initial=1, max=30, jitter=5),
        before_sleep=lambda retry_state: logger.warning(
            f"{__name__}:_invoke - Retry {retry_state.attempt_number}/5 after throttling"
        ),
        reraise=True,
    )
    def _invoke(self, operation: str, **kwargs: Any) -> dict[str, Any]:
        """Call one s3vectors API operation, retrying on throttling."""
        return getattr(self._client, operation)(**kwargs)

    async def _call(self, operation: str, **kwargs: Any) -> dict[str, Any]:
        try:
            return await asyncio.to_thread(
                self._invoke,
                operation,
                vectorBucketName=self._vectors_bucket,
                indexName=self._index_name,
                **kwargs,
            )
        except ClientError as e:
            logger.error(f"{__name__}:{operation} - ClientError: {e}")
            raise VectorStoreError(
                f"S3 Vectors {operation} failed",
                operation=operation,
                details={"error_code": _error_code(e), "error": str(e)},
            ) from e
        except BotoCoreError as e:
            logger.error(f"{__name__}:{operation} - {type(e).__name__}: {e}")
            raise VectorStoreError(
                f"S3 Vectors {operation} failed",
                operation=operation,
                details={"error": str(e)},
            ) from e

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def initialize(self) -> None:
        if self._initialized:
            return
        if not self._vectors_bucket:
            raise ProviderUnavailableError(
                "S3 Vectors bucket is not configured",
                operation="initialize",
            )

        if self._client is None:
            self._client = boto3.client("s3vectors", region_name=self._region)

        try:
            await asyncio.to_thread(
                self._client.get_index,
                vectorBucketName=self._vectors_bucket,
                indexName=self._index_name,
            )
        except ClientError as e:
            if _error_code(e) != "NotFoundException":
                raise VectorStoreError(
                    "Failed to describe S3 Vectors index",
                    operation="initialize",
                    details={"error": str(e)},
                ) from e

            logger.info(f"{__name__}:initialize - Creating S3 Vectors index: {self._index_name}")
            await self._call(
                "create_index",
                dataType="float32",
                dimension=self._dimension,
                distanceMetric="cosine",
                metadataConfiguration={"nonFilterableMetadataKeys": [CONTENT_KEY]},
            )
            await self._wait_until_ready()

        self._initialized = True
        logger.info(f"{__name__}:initialize - S3 Vectors provider initialized")

    async def _wait_until_ready(self) -> None:
        deadline = time.monotonic() + self._ready_timeout_s
        while True:
            try:
                await self._call("get_index")
                return
            except VectorStoreError:
                if time.monotonic() >= deadline:
                    raise ProviderUnavailableError(
                        "S3 Vectors index did not become ready in time",
                        operation="initialize",
                        details={"index_name": self._index_name},
                    )
                await asyncio.sleep(self._ready_poll_s)

    async def is_available(self) -> bool:
        if not self._vectors_bucket:
            return False
        try:
            await self.initialize()
            await self._call("get_index")
            return True
        except Exception as e:
            logger.warning(f"{__name__}:is_available - S3 Vectors not available: {e}")
            return False

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def upsert(self, documents: Sequence[VectorDocument]) -> None:
        if not documents:
            return
        await self.initialize()

        missing = [doc for doc in documents if doc.embedding is None]
        generated: dict[str, list[float]] = {}
        if missing:
            vectors = await self._embedding_source.embed_many([doc.content for doc in missing])
            generated = {doc.id: vector for doc, vector in zip(missing, vectors)}

        entries = []
        for doc in documents:
            embedding = doc.embedding if doc.embedding is not None else generated[doc.id]
            if len(embedding) != self._dimension:
                raise DimensionMismatchError(expected=self._dimension, actual=len(embedding))
            entries.append(
                {
                    "key": doc.id,
                    "data": {"float32": [float(x) for x in embedding]},
                    "metadata": _to_s3_metadata(doc),
                }
            )

        for start in range(0, len(entries), BATCH_SIZE):
            await self._call("put_vectors", vectors=entries[start : start + BATCH_SIZE])

        logger.info(f"{__name__}:upsert - Upserted {len(entries)} vectors to S3 Vectors")

    async def search(
        self,
        embedding: Sequence[float],
        options: VectorSearchOptions | None = None,
    ) -> list[VectorSearchResult]:
        options = options or VectorSearchOptions()
        await self.initialize()

        query: dict[str, Any] = {
            "queryVector": {"float32": [float(x) for x in embedding]},
            "topK": options.top_k,
            "returnMetadata": True,
            "returnDistance": True,
        }
        s3_filter = to_s3_filter(options.filter)
        if s3_filter:
            query["filter"] = s3_filter

        response = await self._call("query_vectors", **query)

        results = []
        for match in response.get("vectors", []):
            score = 1.0 - float(match.get("distance", 1.0))
            if options.min_score is not None and score < options.min_score:
                continue
            content, metadata = _from_s3_metadata(match.get("metadata"))
            results.append(
                VectorSearchResult(
                    id=match["key"],
                    score=score,
                    metadata=metadata if options.include_metadata else None,
                    content=content,
                )
            )

        results.sort(key=lambda result: result.score, reverse=True)
        return results[: options.top_k]

    async def search_by_text(
        self,
        text: str,
        options: VectorSearchOptions | None = None,
    ) -> list[VectorSearchResult]:
        embedding = await self._embedding_source.embed(text)
        return await self.search(embedding, options)

    async def delete(self, ids: Sequence[str]) -> None:
        if not ids:
            return
        await self.initialize()

        keys = list(ids)
        for start in range(0, len(keys), BATCH_SIZE):
            await self._call("delete_vectors", keys=keys[start : start + BATCH_SIZE])
        logger.info(f"{__name__}:delete - Deleted {len(keys)} vectors from S3 Vectors")

    async def delete_by_filter(self, filter_: dict[str, Any]) -> None:
        """
        Delete vectors matching a metadata filter.

        S3 Vectors has no filtered delete, so the index is listed with
        metadata and matching keys are deleted by id.
        """
        await self.initialize()
        normalized = normalize_filter(filter_)

        matched: list[str] = []
        next_token: str | None = None
        while True:
            kwargs: dict[str, Any] = {"returnMetadata": True}
            if next_token:
                kwargs["nextToken"] = next_token
            page = await self._call("list_vectors", **kwargs)

            for vector in page.get("vectors", []):
                if matches_filter(vector.get("metadata") or {}, normalized):
                    matched.append(vector["key"])

            next_token = page.get("nextToken")
            if not next_token:
                break

        await self.delete(matched)
        logger.info(f"{__name__}:delete_by_filter - Deleted {len(matched)} vectors by filter")

    async def fetch(self, ids: Sequence[str]) -> list[VectorDocument]:
        if not ids:
            return []
        await self.initialize()

        response = await self._call(
            "get_vectors",
            keys=list(ids),
            returnData=True,
            returnMetadata=True,
        )

        by_key: dict[str, VectorDocument] = {}
        for record in response.get("vectors", []):
            content, metadata = _from_s3_metadata(record.get("metadata"))
            if metadata is None:
                logger.warning(f"{__name__}:fetch - Skipping {record['key']}: no metadata")
                continue
            by_key[record["key"]] = VectorDocument(
                id=record["key"],
                content=content,
                embedding=(record.get("data") or {}).get("float32"),
                metadata=metadata,
            )

        return [by_key[doc_id] for doc_id in ids if doc_id in by_key]
