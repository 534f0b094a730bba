"""
Vector database boundary layer.

Provides the vault-partitioned vector index used for storage and retrieval.
- FAISSVectorsStore: FAISS index via LangChain with vault filtering

Dependencies: langchain_community, faiss-cpu
System role: Vector store adapter for RAG retrieval
"""

from vaultmind.boundary.vdb.faiss_vectors_store import FAISSVectorsStore
from vaultmind.boundary.vdb.vector_schemas import VectorMetadata, VectorSearchResult

__all__ = [
    "FAISSVectorsStore",
    "VectorMetadata",
    "VectorSearchResult",
]
