"""
Shared settings configuration.

Every settings section reads the same `.env` file with case-insensitive,
prefixed variables; the top-level settings add the package log level.

Dependencies: pydantic, pydantic_settings
System role: Foundation for all configuration classes
"""

import logging
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict

ENV_FILE_OPTIONS: dict[str, Any] = {
    "env_file": ".env",
    "env_file_encoding": "utf-8",
    "case_sensitive": False,
    "extra": "ignore",
}


def section_config(env_prefix: str) -> SettingsConfigDict:
    """Settings config for one section, e.g. section_config("LLM_")."""
    return SettingsConfigDict(env_prefix=env_prefix, **ENV_FILE_OPTIONS)


class BaseSettings(PydanticBaseSettings):
    """Top-level settings: unprefixed variables only."""

    model_config = SettingsConfigDict(**ENV_FILE_OPTIONS)

    log_level: str = Field(
        default="INFO",
        description="Root logging level applied by configure_logging()",
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level
