"""
Chunk domain model for document processing pipeline.

Represents an immutable, vault-scoped text segment with positional metadata.

Dependencies: pydantic
System role: Data structure for document chunks in ingestion pipeline
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ChunkPosition(BaseModel):
    """Location of a chunk inside its source. Absent values are 0, never None."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=0, ge=0, description="1-based page number (0 when unknown)")
    line_from: int = Field(default=0, ge=0, description="First line of the chunk (0 when unknown)")
    line_to: int = Field(default=0, ge=0, description="Last line of the chunk (0 when unknown)")


class Chunk(BaseModel):
    """Bounded text segment, the unit of indexing and retrieval."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Deterministic chunk identifier (content hash)")
    text: str = Field(description="Chunk text content")
    source_ref: str = Field(description="Source name or URI shown to the model")
    vault_id: int = Field(description="Vault partition key")
    position: ChunkPosition = Field(default_factory=ChunkPosition)
    source_id: str | None = Field(default=None, description="Persistent source identifier")
    chunk_index: int = Field(default=0, ge=0, description="Order of the chunk within its source")

    def to_metadata(self) -> dict[str, Any]:
        """
        Flatten chunk attributes into vector index metadata.

        Returns:
            dict: Metadata with vault_id, source_ref and position fields
        """
        return {
            "chunk_id": self.id,
            "vault_id": self.vault_id,
            "source_ref": self.source_ref,
            "source_id": self.source_id or "",
            "chunk_index": self.chunk_index,
            "page": self.position.page,
            "line_from": self.position.line_from,
            "line_to": self.position.line_to,
        }
