"""
Vector store configuration settings.

Selects the vector provider (in-memory or Amazon S3 Vectors) and carries the
remote index settings plus the in-memory capacity policy.

Dependencies: pydantic, pydantic_settings
System role: Vector provider configuration for retrieval
"""

from pydantic import Field
from pydantic_settings import BaseSettings

from clarity_bridge.configs.base import section_config


class VectorStoreSettings(BaseSettings):
    """Vector provider configuration (memory for dev, S3 Vectors for prod)."""

    model_config = section_config("VECTOR_STORE_")

    provider: str = Field(
        default="memory",
        description="Preferred provider: 'memory' or 's3'. Unknown values fall back to memory",
    )
    aws_region: str = Field(default="us-east-1", description="AWS region for S3 Vectors")
    vectors_bucket: str | None = Field(
        default=None,
        description="S3 Vectors bucket name (remote provider is unavailable without it)",
    )
    index_name: str = Field(default="clarity-bridge", description="Vector index name")
    embedding_dimension: int = Field(
        default=1536,
        description="Embedding vector dimension, must match the index",
    )

    index_ready_timeout_s: float = Field(
        default=60.0,
        description="Seconds to wait for a freshly created remote index",
    )
    index_ready_poll_s: float = Field(
        default=2.0,
        description="Polling interval while waiting for the remote index",
    )

    memory_max_documents: int | None = Field(
        default=10_000,
        description="LRU capacity of the in-memory provider (None or 0 disables eviction)",
    )
    default_top_k: int = Field(default=10, description="Default number of search results")
