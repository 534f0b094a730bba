"""
Note CRUD operations.

One note per vault: upsert_for_vault overwrites an existing note instead
of inserting a second row.

Dependencies: sqlalchemy, vaultmind.boundary.db.models
System role: Note persistence operations
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from vaultmind.boundary.db.base import utc_now
from vaultmind.boundary.db.CRUD.base_crud import BaseCRUD
from vaultmind.boundary.db.models.note_model import SUMMARY_NOTE_NAME, NoteModel

logger = logging.getLogger(__name__)


class NoteCRUD(BaseCRUD[NoteModel]):
    """CRUD operations for NoteModel keyed by vault."""

    def __init__(self) -> None:
        super().__init__(NoteModel)

    async def get_by_vault(self, session: AsyncSession, vault_id: int) -> NoteModel | None:
        notes = await self.list_for_vault(session, vault_id)
        return notes[0] if notes else None

    async def upsert_for_vault(
        self,
        session: AsyncSession,
        vault_id: int,
        content: str,
        name: str = SUMMARY_NOTE_NAME,
    ) -> NoteModel:
        """
        Create the vault's note or overwrite the existing one.

        Args:
            session: Async database session
            vault_id: Vault identifier
            content: Summary text
            name: Note display name

        Returns:
            NoteModel: Stored note (flushed, not committed)
        """
        note = await self.get_by_vault(session, vault_id)

        if note is None:
            logger.info(f"{__name__}:upsert_for_vault - Creating note for vault_id={vault_id}")
            return await self.create(session, vault_id=vault_id, name=name, content=content)

        logger.info(f"{__name__}:upsert_for_vault - Overwriting note {note.id} for vault_id={vault_id}")
        note.name = name
        note.content = content
        note.updated_at = utc_now()
        await session.flush()
        await session.refresh(note)
        return note


note_crud = NoteCRUD()
