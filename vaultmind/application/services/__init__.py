"""
Application services.

Caller-facing operations: chat, note generation, mind maps, ingestion and purge.

Dependencies: vaultmind.core, vaultmind.boundary
System role: Service layer exports
"""

from vaultmind.application.services.chat_service import ChatService
from vaultmind.application.services.ingestion_service import IngestionService
from vaultmind.application.services.mind_map_service import MindMapService
from vaultmind.application.services.note_service import NoteService

__all__ = ["ChatService", "IngestionService", "MindMapService", "NoteService"]
