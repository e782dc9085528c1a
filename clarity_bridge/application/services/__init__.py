"""Service orchestrators."""

from .retrieval_service import (
    KnowledgeDocument,
    RetrievalService,
    SpecificationRepository,
    build_retrieval_service,
)

__all__ = [
    "KnowledgeDocument",
    "RetrievalService",
    "SpecificationRepository",
    "build_retrieval_service",
]
