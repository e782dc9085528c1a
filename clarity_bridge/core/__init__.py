"""
Core business logic module.

Contains the exception hierarchy and the multi-view generation engine.
"""

from clarity_bridge.core.exceptions import (
    ClarityBridgeError,
    DimensionMismatchError,
    EmbeddingError,
    ProviderUnavailableError,
    QualityCheckError,
    RetrievalNotInitializedError,
    SpecificationNotFoundError,
    ValidationError,
    VectorStoreError,
    ViewGenerationError,
    ViewParseError,
)

__all__ = [
    "ClarityBridgeError",
    "DimensionMismatchError",
    "EmbeddingError",
    "ProviderUnavailableError",
    "QualityCheckError",
    "RetrievalNotInitializedError",
    "SpecificationNotFoundError",
    "ValidationError",
    "VectorStoreError",
    "ViewGenerationError",
    "ViewParseError",
]
