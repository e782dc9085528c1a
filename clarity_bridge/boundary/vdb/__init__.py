"""
Vector database boundary.

Pluggable vector providers (in-memory and Amazon S3 Vectors) behind a single
interface, plus the similarity ranking primitives they share.
"""

from clarity_bridge.boundary.vdb.memory_vector_provider import MemoryVectorProvider
from clarity_bridge.boundary.vdb.s3_vectors_provider import S3VectorsProvider
from clarity_bridge.boundary.vdb.similarity import cosine_similarity, matches_filter
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

__all__ = [
    "DocumentType",
    "MemoryVectorProvider",
    "S3VectorsProvider",
    "VectorDocument",
    "VectorMetadata",
    "VectorProvider",
    "VectorSearchOptions",
    "VectorSearchResult",
    "cosine_similarity",
    "create_memory_provider",
    "get_vector_provider",
    "matches_filter",
]
