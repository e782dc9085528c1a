"""
Vector database schemas.

Pydantic models for vector operations (documents, search options, results).
Used for type-safe provider interactions.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import ConfigDict, Field

from clarity_bridge.models.common import CamelModel

DocumentType = Literal["specification", "context", "knowledge", "template"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class VectorMetadata(CamelModel):
    """
    Metadata attached to each vector.

    Stored and filtered under camelCase keys (userId, teamId, ...).
    Extra keys such as version or qualityScore are kept and filterable.
    """

    model_config = ConfigDict(extra="allow")

    type: DocumentType = Field(description="Semantic document type")
    user_id: str | None = Field(default=None, description="Owning user")
    team_id: str | None = Field(default=None, description="Owning team")
    specification_id: str | None = Field(default=None, description="Source specification")
    title: str | None = Field(default=None, description="Human readable title")
    description: str | None = Field(default=None)
    tags: list[str] | None = Field(default=None)
    created_at: datetime = Field(default_factory=_utcnow)

    def as_filterable(self) -> dict[str, Any]:
        """Flat dict of camelCase keys used for filter evaluation."""
        return self.model_dump(by_alias=True)


class VectorDocument(CamelModel):
    """A stored (id, embedding, content, metadata) tuple."""

    id: str = Field(description="Unique within a provider namespace")
    content: str = Field(description="Document text")
    embedding: list[float] | None = Field(
        default=None,
        description="Embedding vector, generated at upsert time when absent",
    )
    metadata: VectorMetadata


class VectorSearchOptions(CamelModel):
    """Search parameters shared by every provider."""

    top_k: int = Field(default=10, ge=1, description="Maximum number of results")
    filter: dict[str, Any] | None = Field(
        default=None,
        description="Metadata filter: scalar means equality, list means membership",
    )
    min_score: float | None = Field(default=None, description="Minimum cosine similarity")
    include_metadata: bool = Field(default=True)


class VectorSearchResult(CamelModel):
    """Single result from vector search. Never persisted."""

    id: str
    score: float = Field(description="Cosine similarity in [-1, 1]")
    metadata: VectorMetadata | None = None
    content: str | None = None


_FIELD_ALIASES = {
    name: field.alias for name, field in VectorMetadata.model_fields.items() if field.alias
}


def normalize_filter(filter_: dict[str, Any] | None) -> dict[str, Any]:
    """Map snake_case metadata keys in a filter onto their stored camelCase keys."""
    if not filter_:
        return {}
    return {_FIELD_ALIASES.get(key, key): value for key, value in filter_.items()}
