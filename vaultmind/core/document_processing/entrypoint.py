"""
Document ingestion orchestrator.

Coordinates loading, chunking, and vector index upload for a vault's
sources. A source that cannot be loaded is logged and skipped; a batch
that yields no chunks at all is a failure.

Dependencies: All task modules, vaultmind.boundary.vdb
System role: Pipeline orchestration (coordinates only)
"""

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from fastapi.concurrency import run_in_threadpool

from vaultmind.core.document_processing.models import Chunk, IngestionResult
from vaultmind.core.document_processing.tasks import ChunkingTask, ParsingTask
from vaultmind.core.exceptions import DocumentLoadError, NotFoundError
from vaultmind.models.source import SourceReference

if TYPE_CHECKING:
    from vaultmind.boundary.vdb.faiss_vectors_store import FAISSVectorsStore

logger = logging.getLogger(__name__)


@dataclass
class LoadedChunks:
    """Chunks of a batch plus the names of sources that were skipped."""

    chunks: list[Chunk] = field(default_factory=list)
    skipped_sources: list[str] = field(default_factory=list)


class SourceChunkLoader:
    """Load and chunk sources, skipping the ones that fail."""

    def __init__(
        self,
        parsing_task: ParsingTask | None = None,
        chunking_task: ChunkingTask | None = None,
    ) -> None:
        self._parsing_task = parsing_task or ParsingTask()
        self._chunking_task = chunking_task or ChunkingTask()

    def load(self, vault_id: int, sources: Sequence[SourceReference]) -> LoadedChunks:
        """
        Parse and chunk every source of a vault.

        Args:
            vault_id: Vault partition key stamped on every chunk
            sources: Sources to process, in order

        Returns:
            LoadedChunks: Chunks in source order and skipped source names
        """
        loaded = LoadedChunks()

        for source in sources:
            try:
                documents = self._parsing_task.parse(source)
            except DocumentLoadError as e:
                logger.warning(f"{__name__}:load - Skipping source {source.name}: {e.message}")
                loaded.skipped_sources.append(source.name)
                continue

            documents = [doc for doc in documents if doc.page_content.strip()]
            if not documents:
                logger.warning(f"{__name__}:load - Source {source.name} has no text, skipping")
                loaded.skipped_sources.append(source.name)
                continue

            chunks = self._chunking_task.chunk(documents, vault_id=vault_id, source_ref=source.name)
            loaded.chunks.extend(chunks)

        logger.info(
            f"{__name__}:load - vault_id={vault_id}, sources={len(sources)}, "
            f"chunks={len(loaded.chunks)}, skipped={len(loaded.skipped_sources)}"
        )
        return loaded


class IngestionPipeline:
    """Orchestrate vault ingestion: load -> chunk -> embed+upsert."""

    def __init__(
        self,
        vector_store: "FAISSVectorsStore",
        loader: SourceChunkLoader | None = None,
    ) -> None:
        """
        Initialize pipeline.

        Args:
            vector_store: Vector index receiving the chunks
            loader: Source loader (default parsing and chunking settings if None)
        """
        self._vector_store = vector_store
        self._loader = loader or SourceChunkLoader()

    async def ingest(self, vault_id: int, sources: Sequence[SourceReference]) -> IngestionResult:
        """
        Index every loadable source of a vault.

        Re-ingesting a source replaces its vectors, since chunk ids are
        derived from vault, source, position and content.

        Args:
            vault_id: Vault partition key
            sources: Sources to index

        Returns:
            IngestionResult: Counts, skipped sources and chunk ids

        Raises:
            NotFoundError: When no sources are given or no chunks were produced
            VectorStoreError: When the index update fails
        """
        start_time = time.perf_counter()

        if not sources:
            raise NotFoundError("No sources found for this vault", vault_id=vault_id)

        loaded = await run_in_threadpool(self._loader.load, vault_id, sources)
        if not loaded.chunks:
            raise NotFoundError(
                "No valid documents found to index",
                vault_id=vault_id,
                details={"skipped_sources": loaded.skipped_sources},
            )

        # Identical name and content across sources would repeat an id
        unique: dict[str, Chunk] = {}
        for chunk in loaded.chunks:
            unique.setdefault(chunk.id, chunk)
        chunks = list(unique.values())

        chunk_ids = await run_in_threadpool(
            self._vector_store.upsert,
            [chunk.id for chunk in chunks],
            [chunk.text for chunk in chunks],
            [chunk.to_metadata() for chunk in chunks],
        )

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"{__name__}:ingest - vault_id={vault_id}, chunks={len(chunk_ids)}, "
            f"elapsed_ms={elapsed_ms:.1f}"
        )

        return IngestionResult(
            vault_id=vault_id,
            source_count=len(sources),
            skipped_sources=loaded.skipped_sources,
            chunk_count=len(chunk_ids),
            chunk_ids=chunk_ids,
            processing_time_ms=elapsed_ms,
        )

    async def purge(self, vault_id: int) -> int:
        """Delete every vector of a vault; returns the number removed."""
        deleted = await run_in_threadpool(self._vector_store.delete, vault_id)
        logger.info(f"{__name__}:purge - vault_id={vault_id}, deleted={deleted}")
        return deleted
