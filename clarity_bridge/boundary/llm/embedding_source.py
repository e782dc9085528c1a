"""
Embedding source adapters.

The retrieval engine only needs "text in, fixed-length vector out". This
module defines that contract and a LangChain-backed implementation using
Google Gemini embeddings with a fixed output dimension.

Dependencies: langchain_core, langchain_google_genai, clarity_bridge.configs
System role: Embedding generation collaborator
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from langchain_core.embeddings import Embeddings
from langchain_google_genai import GoogleGenerativeAIEmbeddings

from clarity_bridge.configs import Settings, get_settings
from clarity_bridge.core.exceptions import EmbeddingError

logger = logging.getLogger(__name__)


@runtime_checkable
class EmbeddingSource(Protocol):
    """Anything that turns text into a fixed-dimension vector."""

    async def embed(self, text: str) -> list[float]: ...

    async def embed_many(self, texts: Sequence[str]) -> list[list[float]]: ...


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """
    GoogleGenerativeAIEmbeddings with a fixed output dimensionality.

    The base class does not apply output_dimensionality from the constructor,
    so every call passes it explicitly to keep vectors aligned with the index.
    """

    _output_dimensionality: int = 1536

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        output_dimensionality: int = 1536,
        **kwargs,
    ) -> None:
        super().__init__(model=model, **kwargs)
        self._output_dimensionality = output_dimensionality
        logger.info(
            f"{__name__}:__init__ - Initialized with model={model}, "
            f"output_dimensionality={output_dimensionality}"
        )

    def embed_documents(self, texts: list[str], **kwargs) -> list[list[float]]:
        kwargs.setdefault("output_dimensionality", self._output_dimensionality)
        return super().embed_documents(texts, **kwargs)

    def embed_query(self, text: str, **kwargs) -> list[float]:
        kwargs.setdefault("output_dimensionality", self._output_dimensionality)
        return super().embed_query(text, **kwargs)


class LangChainEmbeddingSource:
    """
    EmbeddingSource over any LangChain Embeddings implementation.

    LangChain embedding clients are synchronous here, so calls run in a
    worker thread to keep the event loop free.
    """

    def __init__(self, embeddings: Embeddings, dimension: int | None = None) -> None:
        """
        Args:
            embeddings: LangChain embeddings client
            dimension: Expected vector length; checked on every result when set
        """
        self._embeddings = embeddings
        self._dimension = dimension

    @property
    def dimension(self) -> int | None:
        return self._dimension

    async def embed(self, text: str) -> list[float]:
        try:
            vector = await asyncio.to_thread(self._embeddings.embed_query, text)
        except Exception as e:
            logger.error(f"{__name__}:embed - {type(e).__name__}: {e}")
            raise EmbeddingError(
                f"Embedding generation failed: {type(e).__name__}",
                details={"text_length": len(text)},
            ) from e
        return self._validate(vector, index=0)

    async def embed_many(self, texts: Sequence[str]) -> list[list[float]]:
        if not texts:
            return []

        try:
            vectors = await asyncio.to_thread(self._embeddings.embed_documents, list(texts))
        except Exception as e:
            logger.error(
                f"{__name__}:embed_many - {type(e).__name__}: {e} (batch size={len(texts)})"
            )
            raise EmbeddingError(
                f"Embedding generation failed: {type(e).__name__}",
                details={"batch_size": len(texts)},
            ) from e

        if len(vectors) != len(texts):
            raise EmbeddingError(
                "Embedding count does not match input count",
                details={"expected": len(texts), "actual": len(vectors)},
            )
        return [self._validate(vector, index=i) for i, vector in enumerate(vectors)]

    def _validate(self, vector: Sequence[float], index: int) -> list[float]:
        if not vector:
            raise EmbeddingError(f"Empty embedding vector at index {index}")
        if self._dimension is not None and len(vector) != self._dimension:
            raise EmbeddingError(
                f"Invalid embedding dimension at index {index}",
                details={"expected": self._dimension, "actual": len(vector)},
            )
        return [float(x) for x in vector]


def create_embedding_source(settings: Settings | None = None) -> LangChainEmbeddingSource:
    """Build the Gemini-backed embedding source from configuration."""
    settings = settings or get_settings()
    dimension = settings.vector_store.embedding_dimension
    embeddings = FixedDimensionEmbeddings(
        model=settings.llm.embedding_model,
        output_dimensionality=dimension,
    )
    return LangChainEmbeddingSource(embeddings, dimension=dimension)
