"""
Ingestion service for vault sources.

Reads a vault's sources from the database and indexes them, or purges the
vault's vectors.

Dependencies: vaultmind.core.document_processing, vaultmind.boundary.db
System role: Ingestion orchestration layer
"""

import logging
from collections.abc import Sequence
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from vaultmind.boundary.db.CRUD.source_crud import source_crud
from vaultmind.core.document_processing.entrypoint import IngestionPipeline
from vaultmind.core.document_processing.models import IngestionResult
from vaultmind.core.validators import validate_vault_id
from vaultmind.models.source import SourceReference

logger = logging.getLogger(__name__)


class IngestionService:
    """Index and purge vault sources."""

    def __init__(self, db: AsyncSession, pipeline: IngestionPipeline) -> None:
        """
        Initialize ingestion service.

        Args:
            db: AsyncSession for reading sources
            pipeline: Ingestion pipeline bound to the vector index
        """
        self.db = db
        self.pipeline = pipeline

    async def ingest_vault(self, vault_id: Any) -> IngestionResult:
        """
        Index every source stored for a vault.

        Args:
            vault_id: Vault identifier

        Returns:
            IngestionResult: Ingestion counts

        Raises:
            ValidationError: If vault_id is invalid
            NotFoundError: If the vault has no sources or no usable content
            VectorStoreError: If the index update fails
        """
        vault = validate_vault_id(vault_id)
        rows = await source_crud.get_by_vault(self.db, vault)
        sources = [SourceReference.model_validate(row) for row in rows]

        logger.info(f"{__name__}:ingest_vault - vault_id={vault}, sources={len(sources)}")
        return await self.pipeline.ingest(vault, sources)

    async def ingest_sources(self, vault_id: Any, sources: Sequence[SourceReference]) -> IngestionResult:
        """Index explicitly given sources under a vault."""
        vault = validate_vault_id(vault_id)
        return await self.pipeline.ingest(vault, sources)

    async def purge_vault(self, vault_id: Any) -> int:
        """
        Delete every indexed vector of a vault.

        Returns:
            int: Number of vectors removed
        """
        vault = validate_vault_id(vault_id)
        return await self.pipeline.purge(vault)
