"""
Database models package.

Exports:
  - SourceModel: Source file ORM model
  - NoteModel: Per-vault summary note ORM model

Dependencies: sqlalchemy, vaultmind.boundary.db.base
System role: Database model definitions for domain entities
"""

from vaultmind.boundary.db.models.note_model import SUMMARY_NOTE_NAME, NoteModel
from vaultmind.boundary.db.models.source_model import SourceModel

__all__ = [
    "SourceModel",
    "NoteModel",
    "SUMMARY_NOTE_NAME",
]
