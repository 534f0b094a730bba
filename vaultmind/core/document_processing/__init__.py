"""
Document processing pipeline for ingestion.

Loads vault sources, splits them into positioned chunks, and indexes them.

Dependencies: langchain_community, langchain_text_splitters, tiktoken, pydantic
System role: Document ingestion pipeline entrypoint
"""

from .entrypoint import IngestionPipeline, LoadedChunks, SourceChunkLoader
from .models import Chunk, ChunkPosition, IngestionResult

__all__ = [
    "IngestionPipeline",
    "SourceChunkLoader",
    "LoadedChunks",
    "Chunk",
    "ChunkPosition",
    "IngestionResult",
]
