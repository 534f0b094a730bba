"""
Source reference schema.

A file uploaded into a vault, as seen by the loaders. ORM rows convert
directly via from_attributes.

Dependencies: pydantic
System role: Source contract between persistence and ingestion
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SourceReference(BaseModel):
    """Pointer to a stored source file."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(description="Source identifier")
    vault_id: int = Field(description="Owning vault")
    name: str = Field(description="Original file name")
    url: str = Field(description="Path of the stored file")

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> str:
        """Accept UUID and integer primary keys."""
        return str(value)
