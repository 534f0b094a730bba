"""
Vector store configuration settings.

Manages the FAISS index location, embedding model and retrieval
parameters for vault-scoped similarity search.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (FAISS index partitioned by vault)."""

    model_config = SettingsConfigDict(
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    index_name: str = Field(default="source-embeddings", description="FAISS index name")
    persist_directory: str | None = Field(
        default=None,
        description="Directory for index persistence (in-memory when unset)",
    )

    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Google Gemini embedding model ID",
    )

    top_k: int = Field(default=5, ge=1, le=100, description="Number of top results to retrieve")
    fetch_k_multiplier: int = Field(
        default=4,
        ge=1,
        description="Over-fetch factor applied before vault filtering",
    )
