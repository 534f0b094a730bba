"""
Task modules for document processing pipeline.

Exports: ParsingTask, ChunkingTask, TextSegment
"""

from .chunking_task import ChunkingTask, TextSegment
from .parsing_task import ParsingTask

__all__ = [
    "ParsingTask",
    "ChunkingTask",
    "TextSegment",
]
