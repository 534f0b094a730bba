"""
Note ORM model.

The consolidated summary of a vault. There is at most one note per vault;
regenerating it overwrites content and updated_at.

Dependencies: sqlalchemy, vaultmind.boundary.db.base
System role: Note persistence for the summarizer output
"""

from sqlalchemy import String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from vaultmind.boundary.db.base import Base, RecordMixin, VaultScopedMixin

SUMMARY_NOTE_NAME = "Summary Note"


class NoteModel(Base, RecordMixin, VaultScopedMixin):
    """
    Note ORM model.

    Attributes:
        name: Display name
        content: Summary text
    """

    __tablename__ = "notes"
    __table_args__ = (UniqueConstraint("vault_id", name="uq_notes_vault_id"),)

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default=SUMMARY_NOTE_NAME,
        doc="Note display name",
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        doc="Summary text",
    )
