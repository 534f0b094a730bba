"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated instances for direct use.

Usage:
    from vaultmind.boundary.db.CRUD import note_crud, source_crud

    sources = await source_crud.get_by_vault(db, vault_id)
"""

from vaultmind.boundary.db.CRUD.base_crud import BaseCRUD
from vaultmind.boundary.db.CRUD.note_crud import NoteCRUD, note_crud
from vaultmind.boundary.db.CRUD.source_crud import SourceCRUD, source_crud

__all__ = [
    "BaseCRUD",
    "NoteCRUD",
    "note_crud",
    "SourceCRUD",
    "source_crud",
]
