"""
Note service for vault summaries.

Loads every source of a vault, summarizes the chunks with the map-reduce
summarizer, and stores the result as the vault's single note. Readers that
need a note (the mind map) get the stored one or trigger generation.

Dependencies: vaultmind.core.agentic_system.summarizer, vaultmind.boundary.db
System role: Note generation orchestration layer
"""

import logging
from typing import Any

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession

from vaultmind.boundary.db.CRUD.note_crud import note_crud
from vaultmind.boundary.db.CRUD.source_crud import source_crud
from vaultmind.core.agentic_system.summarizer.map_reduce_summarizer import MapReduceSummarizer
from vaultmind.core.document_processing.entrypoint import SourceChunkLoader
from vaultmind.core.exceptions import (
    RATE_LIMIT_MESSAGE,
    ErrorKind,
    NotFoundError,
    classify_exception,
)
from vaultmind.core.validators import validate_vault_id
from vaultmind.models.results import NoteResult
from vaultmind.models.source import SourceReference
from vaultmind.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

NOTE_FAILURE_MESSAGE = "Failed to generate notes"


class NoteService:
    """
    Note service for per-vault summaries.

    Owns the transaction for the note upsert: commit on success, rollback
    on any failure.
    """

    def __init__(
        self,
        db: AsyncSession,
        summarizer: MapReduceSummarizer,
        loader: SourceChunkLoader,
    ) -> None:
        """
        Initialize note service.

        Args:
            db: AsyncSession for database operations
            summarizer: Map-reduce summarizer
            loader: Source loader with the note chunking policy
        """
        self.db = db
        self.summarizer = summarizer
        self.loader = loader

    async def generate_note(self, vault_id: Any) -> NoteResult:
        """
        Summarize a vault's sources and store the note.

        Args:
            vault_id: Vault identifier (int or decimal string)

        Returns:
            NoteResult: Summary text, or a flat error
        """
        try:
            vault = validate_vault_id(vault_id)
            logger.info(f"{__name__}:generate_note - START vault_id={vault}")

            rows = await source_crud.get_by_vault(self.db, vault)
            if not rows:
                raise NotFoundError("No sources found for this vault", vault_id=vault)
            sources = [SourceReference.model_validate(row) for row in rows]

            loaded = await run_in_threadpool(self.loader.load, vault, sources)
            if not loaded.chunks:
                raise NotFoundError(
                    "No valid documents found to summarize",
                    vault_id=vault,
                    details={"skipped_sources": loaded.skipped_sources},
                )

            summary = await self.summarizer.summarize([chunk.text for chunk in loaded.chunks])

            await note_crud.upsert_for_vault(self.db, vault, summary)
            await self.db.commit()

            logger.info(
                f"{__name__}:generate_note - END vault_id={vault}, "
                f"chunks={len(loaded.chunks)}, summary_len={len(summary)}"
            )
            return NoteResult.ok(summary)

        except Exception as e:
            await self.db.rollback()
            return self._failure("generate_note", e, vault_id)

    async def get_or_generate_note(self, vault_id: Any) -> NoteResult:
        """
        Return the stored note of a vault, generating it first when absent.

        Args:
            vault_id: Vault identifier (int or decimal string)

        Returns:
            NoteResult: Stored or freshly generated note, or a flat error
        """
        try:
            vault = validate_vault_id(vault_id)
            note = await note_crud.get_by_vault(self.db, vault)
        except Exception as e:
            return self._failure("get_or_generate_note", e, vault_id)

        if note is None:
            logger.info(f"{__name__}:get_or_generate_note - No stored note, generating vault_id={vault}")
            return await self.generate_note(vault)
        return NoteResult.ok(note.content or "")

    def _failure(self, operation: str, exc: Exception, vault_id: Any) -> NoteResult:
        error = classify_exception(exc)
        log_exception_with_context(
            logger,
            f"{__name__}:{operation} - FAILED",
            exc,
            vault_id=vault_id,
            error_kind=error.error_kind.value,
        )
        if error.error_kind is ErrorKind.RATE_LIMITED:
            return NoteResult.failure(error, RATE_LIMIT_MESSAGE)
        if error.error_kind is ErrorKind.UPSTREAM_FAILURE:
            return NoteResult.failure(error, NOTE_FAILURE_MESSAGE)
        return NoteResult.failure(error)

    async def get_note(self, vault_id: Any) -> str:
        """
        Read the stored note of a vault.

        Args:
            vault_id: Vault identifier

        Returns:
            str: Note content ("" when no note was generated yet)

        Raises:
            ValidationError: If vault_id is invalid
        """
        vault = validate_vault_id(vault_id)
        note = await note_crud.get_by_vault(self.db, vault)
        return note.content if note else ""
