"""
Vector store configuration settings.

Chunking parameters, embedding dimension and the storage tier used for
chunk vectors.

Dependencies: pydantic, pydantic_settings
System role: Vector storage and chunking configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (database with memory fallback, or memory only)."""

    model_config = SettingsConfigDict(
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    backend: str = Field(
        default="database",
        description="Chunk storage tier: 'database' (with memory fallback) or 'memory'",
    )
    embedding_dimension: int = Field(
        default=1536,
        description="Embedding vector dimension, constant system-wide",
    )
    chunk_size: int = Field(default=1000, description="Target chunk size in characters")
    chunk_overlap: int = Field(default=200, description="Overlap between consecutive chunks")
    top_k: int = Field(default=5, description="Default number of search results")
