"""
Vector database schemas.

Pydantic models for vector search results and their metadata.
Used for type-safe vector index interactions.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from typing import Any

from pydantic import BaseModel, Field


class VectorMetadata(BaseModel):
    """
    Metadata attached to each vector.

    vault_id is the partition key every retrieval filters on.
    """

    vault_id: int | None = Field(default=None, description="Vault partition key")
    chunk_id: str = Field(default="", description="Deterministic chunk identifier")
    source_ref: str = Field(default="", description="Source name or URI")
    source_id: str = Field(default="", description="Persistent source identifier")
    chunk_index: int = Field(default=0, description="Order of the chunk within its source")
    page: int = Field(default=0, description="Page number in source document (0 when unknown)")
    line_from: int = Field(default=0, description="First line (0 when unknown)")
    line_to: int = Field(default=0, description="Last line (0 when unknown)")

    @classmethod
    def from_document_metadata(cls, metadata: dict[str, Any] | None) -> "VectorMetadata":
        """Build metadata from a stored document's metadata dict, ignoring unknown keys."""
        metadata = metadata or {}
        return cls(**{key: value for key, value in metadata.items() if key in cls.model_fields and value is not None})


class VectorSearchResult(BaseModel):
    """Single result from vector search."""

    chunk_id: str = Field(description="Chunk identifier")
    content: str = Field(description="Chunk text content")
    metadata: VectorMetadata = Field(description="Chunk metadata")
    score: float = Field(description="Raw distance reported by the index (lower is closer)")
