"""
LLM configuration settings.

Model identifiers and generation defaults for the text-generation and
embedding collaborators.

Dependencies: pydantic, pydantic_settings
System role: LLM collaborator configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings

from clarity_bridge.configs.base import section_config


class LLMSettings(BaseSettings):
    """Google Gemini text and embedding model configuration."""

    model_config = section_config("LLM_")

    model_id: str = Field(
        default="gemini-2.5-flash",
        description="Chat model used to generate views and self-evaluations",
    )
    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Embedding model ID (gemini-embedding-001 supports reduced dimensions)",
    )
    temperature: float = Field(default=0.7, description="Default generation temperature")
    max_tokens: int = Field(default=3000, description="Default completion token budget")
