"""
Retrieval service orchestrator.

Selects the vector provider once at startup, then stores and searches
documents: specifications, team knowledge and context snippets.

Dependencies: clarity_bridge.boundary.vdb, clarity_bridge.boundary.llm
System role: Semantic search and related-specification use cases
"""

import json
import logging
import secrets
import time
from collections.abc import Sequence
from typing import Any, Protocol

from pydantic import Field

from clarity_bridge.boundary.llm.embedding_source import EmbeddingSource
from clarity_bridge.boundary.vdb.vector_provider import VectorProvider
from clarity_bridge.boundary.vdb.vector_schemas import (
    DocumentType,
    VectorDocument,
    VectorMetadata,
    VectorSearchOptions,
    VectorSearchResult,
)
from clarity_bridge.boundary.vdb.vector_store_factory import (
    create_memory_provider,
    get_vector_provider,
)
from clarity_bridge.configs import Settings, get_settings
from clarity_bridge.core.exceptions import (
    RetrievalNotInitializedError,
    SpecificationNotFoundError,
    ValidationError,
)
from clarity_bridge.models.common import CamelModel
from clarity_bridge.models.specification import SpecificationRecord, SpecificationVersion
from clarity_bridge.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"
# Metadata keys owned by VectorMetadata, by field name and by stored alias
_RESERVED_METADATA_KEYS = frozenset(VectorMetadata.model_fields) | frozenset(
    field.alias for field in VectorMetadata.model_fields.values() if field.alias
)


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


class SpecificationRepository(Protocol):
    """Persistence collaborator that owns specifications and their versions."""

    async def get_with_latest_version(self, specification_id: str) -> SpecificationRecord | None: ...


class KnowledgeDocument(CamelModel):
    """Input for storing a document; the id is generated when absent."""

    id: str | None = None
    content: str
    type: DocumentType
    user_id: str | None = None
    team_id: str | None = None
    specification_id: str | None = None
    title: str | None = None
    description: str | None = None
    tags: list[str] | None = None
    extra: dict[str, Any] = Field(default_factory=dict)


class RetrievalService:
    """
    Retrieval orchestrator.

    The preferred provider is used when available; otherwise the service
    degrades to the fallback (in-memory) provider. The choice is made once,
    in initialize(), and is not revisited if the provider fails later.
    """

    def __init__(
        self,
        preferred: VectorProvider,
        fallback: VectorProvider,
        embedding_source: EmbeddingSource,
        repository: SpecificationRepository | None = None,
    ) -> None:
        """
        Initialize retrieval service.

        Args:
            preferred: Provider named by configuration
            fallback: Provider used when the preferred one is unavailable
            embedding_source: Used to re-embed specifications without a stored vector
            repository: Optional specification store for index_specification_by_id
        """
        self._preferred = preferred
        self._fallback = fallback
        self._embedding_source = embedding_source
        self._repository = repository
        self._provider: VectorProvider | None = None

    @property
    def provider(self) -> VectorProvider:
        if self._provider is None:
            raise RetrievalNotInitializedError()
        return self._provider

    @property
    def is_initialized(self) -> bool:
        return self._provider is not None

    async def initialize(self) -> None:
        """Select the active provider and initialize it. Idempotent."""
        if self._provider is not None:
            return

        provider = self._preferred
        if provider is not self._fallback and not await provider.is_available():
            log_with_context(
                logger,
                logging.WARNING,
                f"{__name__}:initialize - Preferred vector provider unavailable, "
                "falling back to memory",
                preferred=provider.name,
                fallback=self._fallback.name,
            )
            provider = self._fallback

        await provider.initialize()
        self._provider = provider
        logger.info(f"{__name__}:initialize - Vector provider in use: {provider.name}")

    @staticmethod
    def generate_document_id(doc_type: str) -> str:
        """Return `<type prefix>_<base36 ms timestamp>_<5 random chars>`."""
        timestamp = _to_base36(int(time.time() * 1000))
        suffix = "".join(secrets.choice(_BASE36) for _ in range(5))
        return f"{doc_type[:3]}_{timestamp}_{suffix}"

    def _to_vector_document(self, doc: KnowledgeDocument) -> VectorDocument:
        clashes = sorted(doc.extra.keys() & _RESERVED_METADATA_KEYS)
        if clashes:
            raise ValidationError(
                "Extra metadata may not override document fields",
                field="extra",
                details={"keys": clashes},
            )
        metadata = VectorMetadata(
            type=doc.type,
            user_id=doc.user_id,
            team_id=doc.team_id,
            specification_id=doc.specification_id,
            title=doc.title,
            description=doc.description,
            tags=doc.tags,
            **doc.extra,
        )
        return VectorDocument(
            id=doc.id or self.generate_document_id(doc.type),
            content=doc.content,
            metadata=metadata,
        )

    async def store_document(self, doc: KnowledgeDocument) -> str:
        """
        Store a single document.

        Returns:
            str: The document id (generated when the input has none)

        Raises:
            ValidationError: If `extra` reuses a metadata field name
        """
        vector_doc = self._to_vector_document(doc)
        await self.provider.upsert([vector_doc])
        return vector_doc.id

    async def store_documents(self, docs: Sequence[KnowledgeDocument]) -> list[str]:
        """Store a batch of documents. An empty batch makes no calls."""
        provider = self.provider
        if not docs:
            return []

        vector_docs = [self._to_vector_document(doc) for doc in docs]
        await provider.upsert(vector_docs)
        logger.info(f"{__name__}:store_documents - Stored {len(vector_docs)} documents")
        return [doc.id for doc in vector_docs]

    async def search_similar(
        self,
        query: str,
        options: VectorSearchOptions | None = None,
        user_id: str | None = None,
        team_id: str | None = None,
        doc_type: DocumentType | None = None,
    ) -> list[VectorSearchResult]:
        """
        Semantic search scoped by owner, team and document type.

        Scoping arguments are merged over any filter in the options.
        """
        options = options or VectorSearchOptions()
        filter_ = dict(options.filter or {})
        if user_id:
            filter_["userId"] = user_id
        if team_id:
            filter_["teamId"] = team_id
        if doc_type:
            filter_["type"] = doc_type

        scoped = options.model_copy(update={"filter": filter_ or None})
        return await self.provider.search_by_text(query, scoped)

    @staticmethod
    def compose_specification_content(version: SpecificationVersion) -> str:
        """Join the JSON of each present, non-empty view with a blank line."""
        parts = []
        for view in (version.pm_view, version.frontend_view, version.backend_view):
            if view:
                parts.append(json.dumps(view))
        return "\n\n".join(parts)

    @staticmethod
    def specification_document_id(specification_id: str) -> str:
        return f"spe_{specification_id}"

    async def index_specification(self, spec: SpecificationRecord) -> str:
        """
        Index the latest version of a specification.

        Re-indexing the same specification replaces its previous entry.

        Raises:
            SpecificationNotFoundError: If the specification has no version
        """
        version = spec.latest_version
        if version is None:
            raise SpecificationNotFoundError(
                spec.id, details={"reason": "no version to index"}
            )

        doc = KnowledgeDocument(
            id=self.specification_document_id(spec.id),
            content=self.compose_specification_content(version),
            type="specification",
            user_id=spec.author_id,
            team_id=spec.team_id,
            specification_id=spec.id,
            title=spec.title,
            description=spec.description,
            tags=[spec.priority.lower(), spec.status.lower()],
            extra={"version": version.version, "qualityScore": spec.quality_score},
        )
        doc_id = await self.store_document(doc)
        logger.info(f"{__name__}:index_specification - Indexed specification {spec.id}")
        return doc_id

    async def index_specification_by_id(self, specification_id: str) -> str:
        """Load a specification from the repository and index it."""
        spec = None
        if self._repository is not None:
            spec = await self._repository.get_with_latest_version(specification_id)
        if spec is None:
            raise SpecificationNotFoundError(specification_id)
        return await self.index_specification(spec)

    async def remove_specification(self, specification_id: str) -> None:
        await self.provider.delete_by_filter({"specificationId": specification_id})
        logger.info(f"{__name__}:remove_specification - Removed specification {specification_id}")

    async def get_related_specifications(
        self,
        specification_id: str,
        limit: int = 5,
        team_id: str | None = None,
    ) -> list[dict[str, Any]]:
        """
        Find specifications similar to an indexed one.

        Returns:
            list[dict]: Up to `limit` entries of {id, title, score}; empty when
            the source specification is not indexed
        """
        provider = self.provider
        source_id = self.specification_document_id(specification_id)
        found = await provider.fetch([source_id])
        if not found:
            logger.info(
                f"{__name__}:get_related_specifications - Specification {specification_id} "
                "is not indexed"
            )
            return []

        source = found[0]
        embedding = source.embedding
        if embedding is None:
            embedding = await self._embedding_source.embed(source.content)

        filter_: dict[str, Any] = {"type": "specification"}
        if team_id:
            filter_["teamId"] = team_id

        results = await provider.search(
            embedding,
            VectorSearchOptions(top_k=limit + 1, filter=filter_),
        )

        related = []
        for result in results:
            metadata = result.metadata
            result_spec_id = metadata.specification_id if metadata else None
            if result.id == source_id or result_spec_id == specification_id:
                continue
            related.append(
                {
                    "id": result_spec_id or result.id,
                    "title": (metadata.title if metadata else None) or "Unknown",
                    "score": result.score,
                }
            )
        return related[:limit]

    async def store_team_knowledge(
        self,
        team_id: str,
        title: str,
        content: str,
        tags: list[str] | None = None,
    ) -> str:
        doc = KnowledgeDocument(
            content=content,
            type="knowledge",
            team_id=team_id,
            title=title,
            tags=tags or [],
        )
        return await self.store_document(doc)

    async def search_team_knowledge(
        self,
        team_id: str,
        query: str,
        options: VectorSearchOptions | None = None,
    ) -> list[VectorSearchResult]:
        return await self.search_similar(query, options, team_id=team_id, doc_type="knowledge")


def build_retrieval_service(
    embedding_source: EmbeddingSource,
    settings: Settings | None = None,
    repository: SpecificationRepository | None = None,
) -> RetrievalService:
    """Assemble the retrieval service from configuration. Call initialize() before use."""
    settings = settings or get_settings()
    preferred = get_vector_provider(embedding_source, settings)
    fallback = preferred if preferred.name == "memory" else create_memory_provider(
        embedding_source, settings
    )
    return RetrievalService(preferred, fallback, embedding_source, repository=repository)
