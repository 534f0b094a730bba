"""
Generic CRUD for vault-owned records.

Model-specific CRUD classes inherit keyed lookups plus the vault-scoped
list and delete queries every table here needs.

Dependencies: sqlalchemy
System role: Foundation for all database CRUD operations
"""

from collections.abc import Sequence
from typing import Generic, TypeVar
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from vaultmind.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    CRUD operations over one model with RecordMixin and VaultScopedMixin columns.

    Nothing here commits: callers own the transaction.
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **kwargs) -> ModelT:
        """
        Insert a row and load its generated key and timestamps.

        Args:
            session: Async database session
            **kwargs: Column values

        Returns:
            The flushed and refreshed instance
        """
        instance = self.model(**kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(self, session: AsyncSession, id: UUID) -> ModelT | None:
        result = await session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def get_all(self, session: AsyncSession) -> Sequence[ModelT]:
        """Every row, oldest first."""
        result = await session.execute(select(self.model).order_by(self.model.created_at))
        return result.scalars().all()

    async def list_for_vault(self, session: AsyncSession, vault_id: int) -> Sequence[ModelT]:
        """Rows of one vault, oldest first."""
        stmt = (
            select(self.model)
            .where(self.model.vault_id == vault_id)
            .order_by(self.model.created_at)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def delete_for_vault(self, session: AsyncSession, vault_id: int) -> int:
        """Delete the rows of one vault; returns the row count."""
        result = await session.execute(delete(self.model).where(self.model.vault_id == vault_id))
        return result.rowcount

    async def delete_by_id(self, session: AsyncSession, id: UUID) -> bool:
        """Delete one row; False when it did not exist."""
        result = await session.execute(delete(self.model).where(self.model.id == id))
        return result.rowcount > 0
