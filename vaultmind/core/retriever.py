"""
Retrieval logic with vault filtering.

Runs top-k similarity queries restricted to one vault and formats the hits
into the text the agent's model reads.

Dependencies: vaultmind.boundary.vdb, fastapi.concurrency
System role: RAG retrieval business logic
"""

import logging
from typing import TYPE_CHECKING

from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, Field

from vaultmind.boundary.vdb.vector_schemas import VectorSearchResult

if TYPE_CHECKING:
    from vaultmind.boundary.vdb.faiss_vectors_store import FAISSVectorsStore

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 5
UNDEFINED_SOURCE = "Undefined Source"


class RetrievalResult(BaseModel):
    """Formatted context for the model plus the raw hits behind it."""

    formatted_text: str = Field(description="Hits rendered as 'Source: ...\\nContent: ...' blocks")
    results: list[VectorSearchResult] = Field(default_factory=list, description="Raw ranked hits")


def format_results(results: list[VectorSearchResult]) -> str:
    """
    Render hits for the model, separated by blank lines.

    Args:
        results: Ranked search results

    Returns:
        str: Formatted context ("" when there are no hits)
    """
    return "\n\n".join(
        f"Source: {result.metadata.source_ref or UNDEFINED_SOURCE}\nContent: {result.content}"
        for result in results
    )


class Retriever:
    """Vault-scoped retrieval over the vector index."""

    def __init__(self, vector_store: "FAISSVectorsStore", top_k: int = DEFAULT_TOP_K) -> None:
        """
        Initialize retriever with vector index.

        Args:
            vector_store: Vault-partitioned vector index
            top_k: Number of hits per query
        """
        self._vector_store = vector_store
        self._top_k = top_k

    @property
    def top_k(self) -> int:
        return self._top_k

    async def retrieve(self, query: str, vault_id: int) -> RetrievalResult:
        """
        Retrieve the closest chunks of one vault.

        An empty index or a vault without matches is a normal outcome and
        yields an empty formatted string.

        Args:
            query: Search query
            vault_id: Vault partition filter

        Returns:
            RetrievalResult: Formatted text and raw results
        """
        logger.info(f"{__name__}:retrieve - START query_len={len(query)}, vault_id={vault_id}, k={self._top_k}")

        results = await run_in_threadpool(
            self._vector_store.query,
            query,
            self._top_k,
            vault_id,
        )

        if not results:
            logger.warning(f"{__name__}:retrieve - No results found for vault_id={vault_id}")

        formatted = format_results(results)
        logger.info(f"{__name__}:retrieve - END hits={len(results)}, output_len={len(formatted)}")
        return RetrievalResult(formatted_text=formatted, results=results)
