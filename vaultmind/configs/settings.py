"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from vaultmind.configs.base import BaseSettings
from vaultmind.configs.database import DatabaseSettings
from vaultmind.configs.llm import LLMSettings
from vaultmind.configs.pipeline import ChunkingSettings, SummarizerSettings
from vaultmind.configs.vector_store import VectorStoreSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    llm: LLMSettings = Field(default_factory=LLMSettings)
    vector_store: VectorStoreSettings = Field(default_factory=VectorStoreSettings)
    chunking: ChunkingSettings = Field(default_factory=ChunkingSettings)
    summarizer: SummarizerSettings = Field(default_factory=SummarizerSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    sources_directory: str | None = Field(
        default=None,
        description="Directory that relative or web-style source URLs resolve against",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Environment variables are loaded once on first call.

    Returns:
        Settings: Application settings instance

    Usage:
        from vaultmind.configs import get_settings
        settings = get_settings()
    """
    return Settings()
