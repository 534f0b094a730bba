"""
Ingestion result model for document processing.

Represents the outcome of ingesting a vault's sources into the vector index.

Dependencies: pydantic
System role: Return type for IngestionPipeline.ingest()
"""

from pydantic import BaseModel, Field


class IngestionResult(BaseModel):
    """Result of document ingestion pipeline execution."""

    vault_id: int = Field(description="Vault the chunks were indexed under")
    source_count: int = Field(description="Number of sources considered")
    skipped_sources: list[str] = Field(
        default_factory=list,
        description="Sources that could not be loaded",
    )
    chunk_count: int = Field(description="Number of chunks indexed")
    chunk_ids: list[str] = Field(default_factory=list, description="Indexed chunk identifiers")
    processing_time_ms: float = Field(description="Total processing time in milliseconds")
