"""
Test suite for vector provider selection.

System role: Verification of the provider factory
"""

import logging

import pytest

from clarity_bridge.boundary.vdb.memory_vector_provider import MemoryVectorProvider
from clarity_bridge.boundary.vdb.s3_vectors_provider import S3VectorsProvider
from clarity_bridge.boundary.vdb.vector_schemas import VectorDocument, VectorMetadata
from clarity_bridge.boundary.vdb.vector_store_factory import (
    create_memory_provider,
    get_vector_provider,
)


class TestGetVectorProvider:
    """Test suite for get_vector_provider."""

    def test_memory_should_build_memory_provider(self, fake_embeddings, test_settings) -> None:
        provider = get_vector_provider(fake_embeddings, test_settings)

        assert isinstance(provider, MemoryVectorProvider)

    def test_s3_should_build_s3_provider(self, fake_embeddings, test_settings) -> None:
        test_settings.vector_store.vectors_bucket = "bucket"

        provider = get_vector_provider(fake_embeddings, test_settings, provider_name="S3")

        assert isinstance(provider, S3VectorsProvider)
        assert provider.name == "s3"

    def test_unknown_name_should_fall_back_to_memory(
        self, fake_embeddings, test_settings, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING):
            provider = get_vector_provider(fake_embeddings, test_settings, provider_name="pinecone")

        assert isinstance(provider, MemoryVectorProvider)
        assert "Unknown provider" in caplog.text

    @pytest.mark.asyncio
    async def test_memory_provider_should_use_configured_capacity(
        self, fake_embeddings, test_settings
    ) -> None:
        test_settings.vector_store.memory_max_documents = 1
        provider = create_memory_provider(fake_embeddings, test_settings)

        await provider.upsert(
            [
                VectorDocument(id=str(i), content="c", metadata=VectorMetadata(type="context"))
                for i in range(3)
            ]
        )

        assert len(provider) == 1
