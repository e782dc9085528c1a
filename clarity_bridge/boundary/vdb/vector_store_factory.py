"""
Vector provider factory for selecting between memory (dev) and S3 Vectors (prod).

Depends on the VECTOR_STORE_PROVIDER environment variable.
Unknown provider names degrade to the in-memory provider with a warning.

Dependencies: clarity_bridge.boundary.vdb, clarity_bridge.configs
System role: Vector provider instantiation and selection
"""

import logging

from clarity_bridge.boundary.llm.embedding_source import EmbeddingSource
from clarity_bridge.boundary.vdb.memory_vector_provider import MemoryVectorProvider
from clarity_bridge.boundary.vdb.s3_vectors_provider import S3VectorsProvider
from clarity_bridge.boundary.vdb.vector_provider import VectorProvider
from clarity_bridge.configs import Settings, get_settings

logger = logging.getLogger(__name__)


def create_memory_provider(
    embedding_source: EmbeddingSource,
    settings: Settings | None = None,
) -> MemoryVectorProvider:
    """Build the in-memory provider with the configured LRU capacity."""
    settings = settings or get_settings()
    return MemoryVectorProvider(
        embedding_source,
        max_documents=settings.vector_store.memory_max_documents,
        dimension=settings.vector_store.embedding_dimension,
    )


def get_vector_provider(
    embedding_source: EmbeddingSource,
    settings: Settings | None = None,
    provider_name: str | None = None,
) -> VectorProvider:
    """
    Factory function to get the vector provider named by configuration.

    Args:
        embedding_source: Embedding collaborator shared by every provider
        settings: Application settings (defaults to get_settings())
        provider_name: Overrides settings.vector_store.provider

    Returns:
        MemoryVectorProvider or S3VectorsProvider
    """
    settings = settings or get_settings()
    name = (provider_name or settings.vector_store.provider).lower()

    if name == "s3":
        logger.info(f"{__name__}:get_vector_provider - Creating S3 Vectors provider (production mode)")
        return S3VectorsProvider(
            embedding_source,
            vectors_bucket=settings.vector_store.vectors_bucket,
            index_name=settings.vector_store.index_name,
            region=settings.vector_store.aws_region,
            dimension=settings.vector_store.embedding_dimension,
            ready_timeout_s=settings.vector_store.index_ready_timeout_s,
            ready_poll_s=settings.vector_store.index_ready_poll_s,
        )

    if name != "memory":
        logger.warning(
            f"{__name__}:get_vector_provider - Unknown provider '{name}', using memory"
        )
    else:
        logger.info(f"{__name__}:get_vector_provider - Creating memory provider (local dev mode)")
    return create_memory_provider(embedding_source, settings)
