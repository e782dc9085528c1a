"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from clarity_bridge.configs.base import BaseSettings
from clarity_bridge.configs.llm import LLMSettings
from clarity_bridge.configs.quality import QualitySettings
from clarity_bridge.configs.vector_store import VectorStoreSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    vector_store: VectorStoreSettings = Field(default_factory=VectorStoreSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    quality: QualitySettings = Field(default_factory=QualitySettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Environment variables are loaded once, on first call.

    Returns:
        Settings: Application settings instance

    Usage:
        from clarity_bridge.configs import get_settings
        settings = get_settings()
    """
    return Settings()
