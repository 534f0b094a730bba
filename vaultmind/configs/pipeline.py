"""
Chunking and summarization pipeline settings.

Dependencies: pydantic, pydantic_settings
System role: Centralized pipeline configuration
"""

from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ChunkingSettings(BaseSettings):
    """Settings for splitting source text into chunks."""

    model_config = SettingsConfigDict(
        env_prefix="CHUNKING_",
        case_sensitive=False,
        extra="ignore",
    )

    chunk_size: int = Field(default=1000, gt=0, description="Maximum chunk size in units")
    chunk_overlap: int = Field(default=0, ge=0, description="Overlap between consecutive chunks")
    unit: Literal["token", "character"] = Field(
        default="token",
        description="Unit used to measure chunk size and overlap",
    )
    min_chunk_length: int = Field(
        default=10,
        ge=0,
        description="Chunks shorter than this many units are dropped",
    )
    encoding_name: str = Field(
        default="cl100k_base",
        description="tiktoken encoding used when unit is 'token'",
    )

    @model_validator(mode="after")
    def _check_sizes(self) -> "ChunkingSettings":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be smaller than "
                f"chunk_size ({self.chunk_size})"
            )
        if self.min_chunk_length > self.chunk_size:
            raise ValueError(
                f"min_chunk_length ({self.min_chunk_length}) must not exceed "
                f"chunk_size ({self.chunk_size})"
            )
        return self


class SummarizerSettings(BaseSettings):
    """Settings for the hierarchical map-reduce summarizer."""

    model_config = SettingsConfigDict(
        env_prefix="SUMMARIZER_",
        case_sensitive=False,
        extra="ignore",
    )

    token_max: int = Field(
        default=1000,
        gt=0,
        description="Token ceiling for a single reduce call",
    )
    max_collapse_iterations: int = Field(
        default=10,
        gt=0,
        description="Maximum collapse rounds before reporting non-convergence",
    )
    map_concurrency: int = Field(
        default=5,
        gt=0,
        description="Maximum simultaneous map calls",
    )
