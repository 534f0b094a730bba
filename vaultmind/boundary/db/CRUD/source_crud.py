"""
Source CRUD operations.

Dependencies: sqlalchemy, vaultmind.boundary.db.models
System role: Source persistence operations
"""

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vaultmind.boundary.db.CRUD.base_crud import BaseCRUD
from vaultmind.boundary.db.models.source_model import SourceModel


class SourceCRUD(BaseCRUD[SourceModel]):
    """CRUD operations for SourceModel."""

    def __init__(self) -> None:
        super().__init__(SourceModel)

    async def get_by_vault(self, session: AsyncSession, vault_id: int) -> Sequence[SourceModel]:
        """
        Retrieve every source of a vault in upload order.

        Sources uploaded in the same instant are ordered by name so chunk
        order is stable across runs.

        Args:
            session: Async database session
            vault_id: Vault identifier

        Returns:
            Sequence of SourceModels (empty when the vault has none)
        """
        stmt = (
            select(SourceModel)
            .where(SourceModel.vault_id == vault_id)
            .order_by(SourceModel.created_at, SourceModel.name)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def delete_by_vault(self, session: AsyncSession, vault_id: int) -> int:
        """Delete every source row of a vault; returns the row count."""
        return await self.delete_for_vault(session, vault_id)


source_crud = SourceCRUD()
