"""
LLM collaborator boundary.

Embedding and text-generation contracts with LangChain implementations.
"""

from clarity_bridge.boundary.llm.embedding_source import (
    EmbeddingSource,
    LangChainEmbeddingSource,
    create_embedding_source,
)
from clarity_bridge.boundary.llm.text_generator import (
    GenerationResult,
    LangChainTextGenerator,
    PromptTemplate,
    TextGenerator,
    create_text_generator,
)

__all__ = [
    "EmbeddingSource",
    "GenerationResult",
    "LangChainEmbeddingSource",
    "LangChainTextGenerator",
    "PromptTemplate",
    "TextGenerator",
    "create_embedding_source",
    "create_text_generator",
]
