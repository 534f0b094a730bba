"""
Models for document processing pipeline.

Exports: Chunk, ChunkPosition, IngestionResult
"""

from .chunk import Chunk, ChunkPosition
from .pipeline_result import IngestionResult

__all__ = [
    "Chunk",
    "ChunkPosition",
    "IngestionResult",
]
