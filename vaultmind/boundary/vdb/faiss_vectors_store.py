"""
FAISS vector index partitioned by vault.

Stores chunk embeddings with vault-scoped metadata and answers top-k
similarity queries restricted to one vault. Optionally persists the
index to disk for reuse across runs.

Dependencies: faiss-cpu, langchain_community.vectorstores, langchain_core.embeddings
System role: Vector index adapter for RAG retrieval
"""

import logging
import threading
from pathlib import Path
from typing import Any

from langchain_community.vectorstores import FAISS
from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings

from vaultmind.boundary.vdb.vector_schemas import VectorMetadata, VectorSearchResult
from vaultmind.core.exceptions import ValidationError, VectorStoreError

logger = logging.getLogger(__name__)


class FAISSVectorsStore:
    """
    FAISS vector index with vault filtering.

    Wraps LangChain FAISS. The index is created lazily on the first upsert,
    so an empty store answers every query with no results.
    """

    def __init__(
        self,
        embeddings: Embeddings,
        index_name: str = "source-embeddings",
        persist_directory: str | Path | None = None,
        fetch_k_multiplier: int = 4,
    ) -> None:
        """
        Initialize FAISS vector index.

        Args:
            embeddings: Embedding model used for documents and queries
            index_name: Index file name inside persist_directory
            persist_directory: Directory for persistence (None keeps it in memory)
            fetch_k_multiplier: Over-fetch factor applied before vault filtering
        """
        self._embeddings = embeddings
        self._index_name = index_name
        self._persist_dir = Path(persist_directory) if persist_directory else None
        self._fetch_k_multiplier = fetch_k_multiplier
        self._lock = threading.Lock()
        self._store: FAISS | None = self._load_index()

    def _load_index(self) -> FAISS | None:
        """Load an existing index from disk, if any."""
        if self._persist_dir is None:
            return None

        index_path = self._persist_dir / f"{self._index_name}.faiss"
        if not index_path.exists():
            logger.info(f"{__name__}:_load_index - No index at {index_path}, starting empty")
            return None

        logger.info(f"{__name__}:_load_index - Loading index from {self._persist_dir}")
        return FAISS.load_local(
            str(self._persist_dir),
            self._embeddings,
            index_name=self._index_name,
            allow_dangerous_deserialization=True,
        )

    def _save(self) -> None:
        if self._persist_dir is None or self._store is None:
            return
        self._persist_dir.mkdir(parents=True, exist_ok=True)
        self._store.save_local(str(self._persist_dir), index_name=self._index_name)

    def _stored_ids(self) -> set[str]:
        if self._store is None:
            return set()
        return set(self._store.index_to_docstore_id.values())

    def count(self) -> int:
        """Number of vectors currently stored."""
        return len(self._stored_ids())

    def upsert(
        self,
        ids: list[str],
        texts: list[str],
        metadatas: list[dict[str, Any]],
    ) -> list[str]:
        """
        Insert or replace vectors by id.

        Args:
            ids: Unique chunk identifiers
            texts: Chunk texts to embed
            metadatas: Metadata per chunk (must include vault_id)

        Returns:
            list[str]: Stored ids

        Raises:
            ValidationError: When inputs are misaligned or ids repeat
            VectorStoreError: When the embedding or index update fails
        """
        if not (len(ids) == len(texts) == len(metadatas)):
            raise ValidationError(
                "ids, texts and metadatas must have the same length",
                details={"ids": len(ids), "texts": len(texts), "metadatas": len(metadatas)},
            )
        if len(set(ids)) != len(ids):
            raise ValidationError("Chunk ids must be unique within one upsert", field="ids")
        if not ids:
            return []

        with self._lock:
            try:
                # Embed first so a failed embedding leaves the index untouched
                text_embeddings = list(zip(texts, self._embeddings.embed_documents(texts)))

                stored = self._stored_ids()
                existing = [chunk_id for chunk_id in ids if chunk_id in stored]
                if existing and self._store is not None:
                    logger.info(f"{__name__}:upsert - Replacing {len(existing)} existing vectors")
                    self._store.delete(existing)

                if self._store is None:
                    self._store = FAISS.from_embeddings(
                        text_embeddings,
                        self._embeddings,
                        metadatas=metadatas,
                        ids=ids,
                    )
                else:
                    self._store.add_embeddings(text_embeddings, metadatas=metadatas, ids=ids)

                self._save()
            except Exception as e:
                logger.error(f"{__name__}:upsert - FAILED: {type(e).__name__}: {e}")
                raise VectorStoreError(
                    f"Failed to upsert vectors: {e}",
                    operation="upsert",
                    details={"vector_count": len(ids)},
                ) from e

        logger.info(f"{__name__}:upsert - Stored {len(ids)} vectors")
        return list(ids)

    def query(
        self,
        text: str,
        k: int = 5,
        vault_id: int | None = None,
    ) -> list[VectorSearchResult]:
        """
        Similarity search, optionally restricted to one vault.

        Args:
            text: Query text
            k: Number of results to return
            vault_id: Vault partition filter (None searches the whole collection)

        Returns:
            list[VectorSearchResult]: Ranked results, closest first

        Raises:
            VectorStoreError: When the search fails
        """
        with self._lock:
            if self._store is None or not self._stored_ids():
                logger.info(f"{__name__}:query - Index is empty")
                return []

            try:
                results = self._search(text, k, vault_id)
            except Exception as e:
                logger.error(f"{__name__}:query - FAILED: {type(e).__name__}: {e}")
                raise VectorStoreError(
                    f"Failed to query vectors: {e}",
                    operation="query",
                    details={"vault_id": vault_id, "k": k},
                ) from e

        search_results = [self._to_result(doc, score) for doc, score in results[:k]]
        logger.info(
            f"{__name__}:query - Retrieved {len(search_results)} results (vault_id={vault_id}, k={k})"
        )
        return search_results

    def _search(self, text: str, k: int, vault_id: int | None) -> list[tuple[Document, float]]:
        """
        Run the similarity search, widening the candidate pool for vault filters.

        FAISS filters after fetching fetch_k global neighbours, so the pool
        doubles until k vault hits are found or the whole index was scanned.
        """
        if vault_id is None:
            return self._store.similarity_search_with_score(text, k=k)

        total = self._store.index.ntotal
        fetch_k = min(max(k * self._fetch_k_multiplier, 20), total)
        while True:
            results = self._store.similarity_search_with_score(
                text,
                k=k,
                filter={"vault_id": vault_id},
                fetch_k=fetch_k,
            )
            if len(results) >= k or fetch_k >= total:
                return results
            fetch_k = min(fetch_k * 2, total)

    def delete(
        self,
        vault_id: int | None = None,
        source_id: str | None = None,
    ) -> int:
        """
        Delete every vector matching the filter.

        Args:
            vault_id: Delete vectors of this vault
            source_id: Delete vectors of this source

        Returns:
            int: Number of deleted vectors

        Raises:
            ValidationError: When no filter is given
            VectorStoreError: When the deletion fails
        """
        if vault_id is None and source_id is None:
            raise ValidationError("delete requires a vault_id or source_id filter")

        with self._lock:
            if self._store is None:
                return 0

            ids_to_delete = []
            for doc_id in self._store.index_to_docstore_id.values():
                doc = self._store.docstore.search(doc_id)
                if not isinstance(doc, Document):
                    continue
                metadata = doc.metadata or {}
                if vault_id is not None and metadata.get("vault_id") != vault_id:
                    continue
                if source_id is not None and metadata.get("source_id") != source_id:
                    continue
                ids_to_delete.append(doc_id)

            if not ids_to_delete:
                return 0

            try:
                self._store.delete(ids_to_delete)
                self._save()
            except Exception as e:
                raise VectorStoreError(
                    f"Failed to delete vectors: {e}",
                    operation="delete",
                    details={"vault_id": vault_id, "source_id": source_id},
                ) from e

        logger.info(f"{__name__}:delete - Deleted {len(ids_to_delete)} vectors (vault_id={vault_id})")
        return len(ids_to_delete)

    @staticmethod
    def _to_result(doc: Document, score: float) -> VectorSearchResult:
        metadata = VectorMetadata.from_document_metadata(doc.metadata)
        return VectorSearchResult(
            chunk_id=metadata.chunk_id or str(getattr(doc, "id", None) or ""),
            content=doc.page_content,
            metadata=metadata,
            score=float(score),
        )
