"""
Embedding generation task.

Embeds chunk and query text through OpenAI (via LangChain) and degrades to
DeterministicEmbeddings on any failure. Errors are logged, never raised.

Dependencies: langchain_openai, docflow.core.document_processing.fallback_embeddings
System role: Embedding stage of document vectorization and query embedding
"""

import logging

from langchain_core.embeddings import Embeddings
from langchain_openai import OpenAIEmbeddings

from docflow.configs.embedding import EmbeddingSettings
from docflow.core.document_processing.fallback_embeddings import DeterministicEmbeddings
from docflow.core.exceptions import EmbeddingError
from docflow.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


def build_live_embeddings(settings: EmbeddingSettings) -> Embeddings | None:
    """
    Create the OpenAI embeddings client if an API key is configured.

    Args:
        settings: Embedding settings

    Returns:
        Embeddings | None: Live client, or None when no key is set
    """
    if not settings.api_key:
        logger.warning(
            f"{__name__}:build_live_embeddings - OPENAI_API_KEY not configured, "
            "using deterministic fallback embeddings"
        )
        return None

    client = OpenAIEmbeddings(
        model=settings.embedding_model,
        api_key=settings.api_key,
        base_url=settings.base_url,
        request_timeout=settings.request_timeout,
        max_retries=settings.max_retries,
        check_embedding_ctx_length=False,
    )
    logger.info(
        f"{__name__}:build_live_embeddings - Initialized OpenAI embeddings "
        f"model={settings.embedding_model}"
    )
    return client


class EmbeddingTask:
    """Embed text with a live provider and a deterministic fallback."""

    def __init__(
        self,
        live_embeddings: Embeddings | None = None,
        dimension: int = 1536,
        fallback: Embeddings | None = None,
    ) -> None:
        """
        Initialize embedding task.

        Args:
            live_embeddings: Remote embeddings client (None means fallback only)
            dimension: Expected vector length
            fallback: Offline embeddings (DeterministicEmbeddings by default)
        """
        self.dimension = dimension
        self._live = live_embeddings
        self._fallback = fallback or DeterministicEmbeddings(dimension)

    @classmethod
    def from_settings(cls, settings: EmbeddingSettings, dimension: int = 1536) -> "EmbeddingTask":
        """Build an embedding task from settings."""
        return cls(live_embeddings=build_live_embeddings(settings), dimension=dimension)

    @property
    def uses_live_provider(self) -> bool:
        """Whether a live embeddings client is configured."""
        return self._live is not None

    async def embed(self, text: str) -> list[float] | None:
        """
        Generate an embedding for text.

        Args:
            text: Chunk or query text

        Returns:
            list[float] | None: Vector of `dimension` floats; None only for empty text
        """
        if not text:
            return None

        if self._live is None:
            return self._fallback.embed_query(text)

        try:
            vector = await self._live.aembed_query(text)
            if not vector or len(vector) != self.dimension:
                raise EmbeddingError(
                    f"Expected {self.dimension}-dimension embedding, "
                    f"got {len(vector) if vector else 0}"
                )
            return list(vector)
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:embed - Live embedding failed, using fallback",
                e,
                level=logging.WARNING,
                text_length=len(text),
            )
            return self._fallback.embed_query(text)

    async def embed_query(self, query: str) -> list[float] | None:
        """Embed a search query (same contract as embed)."""
        return await self.embed(query)
