"""
Caller-facing schemas.

Dependencies: pydantic
System role: Request and result contracts
"""

from vaultmind.models.results import ChatResult, MindMapResult, NoteResult
from vaultmind.models.source import SourceReference

__all__ = ["ChatResult", "MindMapResult", "NoteResult", "SourceReference"]
