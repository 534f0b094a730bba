"""
Vector index factory.

Builds the FAISS vector index and its Gemini embedding model from settings.
The caller owns the returned instance and passes it to the services that
need it.

Dependencies: langchain_google_genai, vaultmind.boundary.vdb, vaultmind.configs
System role: Vector index instantiation
"""

import logging

from langchain_core.embeddings import Embeddings
from langchain_google_genai import GoogleGenerativeAIEmbeddings

from vaultmind.boundary.vdb.faiss_vectors_store import FAISSVectorsStore
from vaultmind.configs import Settings, get_settings

logger = logging.getLogger(__name__)


def get_embeddings(settings: Settings | None = None) -> Embeddings:
    """
    Create the embedding model configured for the vector index.

    Args:
        settings: Application settings (loaded from environment if None)

    Returns:
        Embeddings: Google Gemini embeddings
    """
    settings = settings or get_settings()
    kwargs = {}
    if settings.llm.api_key:
        kwargs["google_api_key"] = settings.llm.api_key
    return GoogleGenerativeAIEmbeddings(model=settings.vector_store.embedding_model, **kwargs)


def get_vector_store(
    settings: Settings | None = None,
    embeddings: Embeddings | None = None,
) -> FAISSVectorsStore:
    """
    Factory function to build the vault-partitioned vector index.

    Args:
        settings: Application settings (loaded from environment if None)
        embeddings: Embedding model override (Gemini embeddings if None)

    Returns:
        FAISSVectorsStore: Configured vector index
    """
    settings = settings or get_settings()
    config = settings.vector_store

    logger.info(
        f"{__name__}:get_vector_store - Creating FAISS index '{config.index_name}' "
        f"(persist_directory={config.persist_directory})"
    )
    return FAISSVectorsStore(
        embeddings=embeddings or get_embeddings(settings),
        index_name=config.index_name,
        persist_directory=config.persist_directory,
        fetch_k_multiplier=config.fetch_k_multiplier,
    )
