"""
Embedding provider configuration settings.

Dependencies: pydantic_settings
System role: OpenAI embedding API configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmbeddingSettings(BaseSettings):
    """OpenAI embedding configuration. Without an API key the local fallback is used."""

    model_config = SettingsConfigDict(
        env_prefix="OPENAI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = Field(default=None, description="OpenAI API key")
    embedding_model: str = Field(
        default="text-embedding-ada-002",
        description="OpenAI embedding model (1536 dimensions)",
    )
    base_url: str | None = Field(default=None, description="Optional API base URL")
    request_timeout: float = Field(default=30.0, description="Request timeout in seconds")
    max_retries: int = Field(
        default=0,
        description="Client-side retries before falling back to local embeddings",
    )
