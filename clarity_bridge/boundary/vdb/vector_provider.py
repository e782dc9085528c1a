"""
Vector provider contract.

Every backend (in-memory, S3 Vectors) implements this interface identically,
so the retrieval service can switch providers without behavioural change.

Dependencies: clarity_bridge.boundary.vdb.vector_schemas
System role: Pluggable vector store interface
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from clarity_bridge.boundary.vdb.vector_schemas import (
    VectorDocument,
    VectorSearchOptions,
    VectorSearchResult,
)


class VectorProvider(ABC):
    """Storage and similarity search over (id, embedding, content, metadata) tuples."""

    name: str

    @abstractmethod
    async def initialize(self) -> None:
        """Idempotent setup (create the index if needed)."""

    @abstractmethod
    async def upsert(self, documents: Sequence[VectorDocument]) -> None:
        """Store or overwrite documents by id, embedding any that lack a vector."""

    @abstractmethod
    async def search(
        self,
        embedding: Sequence[float],
        options: VectorSearchOptions | None = None,
    ) -> list[VectorSearchResult]:
        """Return up to top_k results ordered by descending cosine similarity."""

    @abstractmethod
    async def search_by_text(
        self,
        text: str,
        options: VectorSearchOptions | None = None,
    ) -> list[VectorSearchResult]:
        """Embed text, then search."""

    @abstractmethod
    async def delete(self, ids: Sequence[str]) -> None:
        """Delete by id. Unknown ids are ignored."""

    @abstractmethod
    async def delete_by_filter(self, filter_: dict[str, Any]) -> None:
        """Delete every document whose metadata matches the filter."""

    @abstractmethod
    async def fetch(self, ids: Sequence[str]) -> list[VectorDocument]:
        """Return stored documents in request order, omitting missing ids."""

    @abstractmethod
    async def is_available(self) -> bool:
        """Report whether the provider is reachable. Never raises."""
