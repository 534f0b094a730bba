"""
RAG agent retrieve tool.

Wraps the vault-scoped Retriever as a LangChain tool the model can call.
The model sees only the formatted text; the raw hits travel as the tool
message artifact.

Dependencies: langchain_core.tools, vaultmind.core.retriever
System role: Retrieval tool for RAG agent
"""

import logging
from typing import TYPE_CHECKING

from langchain_core.tools import BaseTool, tool

from vaultmind.boundary.vdb.vector_schemas import VectorSearchResult

if TYPE_CHECKING:
    from vaultmind.core.retriever import Retriever

logger = logging.getLogger(__name__)

RETRIEVE_TOOL_NAME = "retrieve"


def create_retrieve_tool(retriever: "Retriever", vault_id: int) -> BaseTool:
    """
    Create a retrieve tool bound to one vault.

    Args:
        retriever: Retriever over the vector index
        vault_id: Vault every query is restricted to

    Returns:
        BaseTool: Async tool named "retrieve"
    """

    @tool(RETRIEVE_TOOL_NAME, response_format="content_and_artifact")
    async def retrieve(query: str) -> tuple[str, list[VectorSearchResult]]:
        """Retrieve information related to a query from the user's vault documents."""
        logger.info(f"{__name__}:retrieve - query_len={len(query)}, vault_id={vault_id}")
        result = await retriever.retrieve(query, vault_id)
        return result.formatted_text, result.results

    return retrieve
