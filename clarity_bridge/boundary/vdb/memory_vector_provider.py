"""
In-memory vector provider.

Brute-force cosine search over a process-local dict. Used for development,
tests and as the fallback when the remote provider is unavailable.
An optional LRU capacity bounds memory growth.

Dependencies: clarity_bridge.boundary.vdb.similarity, clarity_bridge.boundary.llm
System role: Local vector store and fallback provider
"""

import logging
from collections import OrderedDict
from collections.abc import Sequence
from typing import Any

from clarity_bridge.boundary.llm.embedding_source import EmbeddingSource
from clarity_bridge.boundary.vdb.similarity import matches_filter, rank_documents
from clarity_bridge.boundary.vdb.vector_provider import VectorProvider
from clarity_bridge.boundary.vdb.vector_schemas import (
    VectorDocument,
    VectorSearchOptions,
    VectorSearchResult,
    normalize_filter,
)
from clarity_bridge.core.exceptions import DimensionMismatchError

logger = logging.getLogger(__name__)


class MemoryVectorProvider(VectorProvider):
    """
    Process-local vector provider.

    Not safe for multi-process use; concurrent coroutine writes to the same
    id resolve as last-write-wins.
    """

    name = "memory"

    def __init__(
        self,
        embedding_source: EmbeddingSource,
        max_documents: int | None = None,
        dimension: int | None = None,
    ) -> None:
        """
        Args:
            embedding_source: Used for documents upserted without an embedding
            max_documents: LRU capacity; None or 0 keeps every document
            dimension: Expected embedding length; unchecked when None
        """
        self._embedding_source = embedding_source
        self._max_documents = max_documents or None
        self._dimension = dimension
        self._documents: OrderedDict[str, VectorDocument] = OrderedDict()

    def __len__(self) -> int:
        return len(self._documents)

    async def initialize(self) -> None:
        logger.info(f"{__name__}:initialize - Memory vector provider initialized")

    async def is_available(self) -> bool:
        return True

    async def upsert(self, documents: Sequence[VectorDocument]) -> None:
        if not documents:
            return

        prepared = []
        for doc in documents:
            embedding = doc.embedding
            if embedding is None:
                embedding = await self._embedding_source.embed(doc.content)
            if self._dimension is not None and len(embedding) != self._dimension:
                raise DimensionMismatchError(expected=self._dimension, actual=len(embedding))
            prepared.append(doc.model_copy(update={"embedding": list(embedding)}))

        # Nothing is written unless the whole batch passed the checks
        for doc in prepared:
            self._documents[doc.id] = doc
            self._documents.move_to_end(doc.id)

        evicted = self._evict()
        logger.info(
            f"{__name__}:upsert - Upserted {len(documents)} vectors to memory"
            + (f", evicted {evicted}" if evicted else "")
        )

    async def search(
        self,
        embedding: Sequence[float],
        options: VectorSearchOptions | None = None,
    ) -> list[VectorSearchResult]:
        options = options or VectorSearchOptions()
        return rank_documents(embedding, list(self._documents.values()), options)

    async def search_by_text(
        self,
        text: str,
        options: VectorSearchOptions | None = None,
    ) -> list[VectorSearchResult]:
        embedding = await self._embedding_source.embed(text)
        return await self.search(embedding, options)

    async def delete(self, ids: Sequence[str]) -> None:
        for doc_id in ids:
            self._documents.pop(doc_id, None)
        logger.info(f"{__name__}:delete - Deleted {len(ids)} vectors from memory")

    async def delete_by_filter(self, filter_: dict[str, Any]) -> None:
        normalized = normalize_filter(filter_)
        to_delete = [
            doc_id
            for doc_id, doc in self._documents.items()
            if matches_filter(doc.metadata.as_filterable(), normalized)
        ]
        for doc_id in to_delete:
            del self._documents[doc_id]
        logger.info(f"{__name__}:delete_by_filter - Deleted {len(to_delete)} vectors by filter")

    async def fetch(self, ids: Sequence[str]) -> list[VectorDocument]:
        found = []
        for doc_id in ids:
            doc = self._documents.get(doc_id)
            if doc is None:
                continue
            self._documents.move_to_end(doc_id)
            found.append(doc)
        return found

    def _evict(self) -> int:
        if self._max_documents is None:
            return 0
        evicted = 0
        while len(self._documents) > self._max_documents:
            self._documents.popitem(last=False)
            evicted += 1
        return evicted
