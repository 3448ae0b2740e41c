"""
Vector store facade.

Persists chunk vectors, lists a document's chunks, runs linear-scan cosine
similarity search and reports aggregate statistics over a chunk store.

Dependencies: docflow.boundary.vdb, docflow.core.document_processing.tasks.embedding_task
System role: Chunk/vector persistence and retrieval for vectorization and search
"""

import logging
import math
from typing import Sequence

from docflow.boundary.vdb.failover import ChunkStore
from docflow.core.document_processing.tasks.embedding_task import EmbeddingTask
from docflow.models.chunk import ChunkRecord, SearchResult, VectorStats
from docflow.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity of two vectors.

    Returns 0.0 when the lengths differ or either vector has zero norm.
    """
    if len(a) != len(b):
        return 0.0

    dot = 0.0
    norm_a = 0.0
    norm_b = 0.0
    for x, y in zip(a, b):
        dot += x * y
        norm_a += x * x
        norm_b += y * y

    if norm_a == 0 or norm_b == 0:
        return 0.0
    return dot / (math.sqrt(norm_a) * math.sqrt(norm_b))


class VectorStore:
    """Chunk/vector persistence and similarity search."""

    def __init__(self, chunk_store: ChunkStore, embedding_task: EmbeddingTask) -> None:
        """
        Initialize vector store.

        Args:
            chunk_store: Storage tier (usually a FailoverChunkStore)
            embedding_task: Embeds search queries
        """
        self._chunk_store = chunk_store
        self._embedding_task = embedding_task

    async def save_chunk_vector(
        self,
        document_id: str,
        content: str,
        vector: list[float],
        chunk_index: int,
        page_number: int | None = None,
    ) -> bool:
        """
        Persist one chunk and its vector.

        Returns:
            bool: True when either tier stored the chunk
        """
        try:
            await self._chunk_store.save_chunk(
                document_id, content, vector, chunk_index, page_number
            )
            return True
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:save_chunk_vector - Failed to save chunk",
                e,
                document_id=document_id,
                chunk_index=chunk_index,
            )
            return False

    async def get_document_chunks(self, document_id: str) -> list[ChunkRecord]:
        """Chunks of a document, ascending by chunk index."""
        return await self._chunk_store.get_chunks(document_id)

    async def delete_document_vectors(self, document_id: str) -> bool:
        """
        Delete every chunk and vector of a document.

        Idempotent: deleting an unknown document still returns True.
        """
        try:
            await self._chunk_store.delete_document(document_id)
            return True
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:delete_document_vectors - Failed to delete vectors",
                e,
                document_id=document_id,
            )
            return False

    async def semantic_search(
        self,
        query: str,
        document_id: str | None = None,
        limit: int = 5,
    ) -> list[SearchResult]:
        """
        Rank stored chunks by cosine similarity to the query.

        Args:
            query: Search text
            document_id: Restrict the scan to one document
            limit: Maximum number of results

        Returns:
            list[SearchResult]: Highest similarity first; ties keep storage order
        """
        query_vector = await self._embedding_task.embed_query(query)
        if query_vector is None or limit <= 0:
            return []

        candidates = await self._chunk_store.search_candidates(document_id)
        results = [
            SearchResult(
                content=record.content,
                similarity=cosine_similarity(query_vector, vector),
                document_id=record.document_id,
                chunk_index=record.chunk_index,
                page_number=record.page_number,
            )
            for record, vector in candidates
        ]
        results.sort(key=lambda result: result.similarity, reverse=True)

        logger.info(
            f"{__name__}:semantic_search - Scored {len(results)} chunks, returning top {limit}"
        )
        return results[:limit]

    async def get_vector_stats(self) -> VectorStats:
        """Aggregate chunk and document counts."""
        return await self._chunk_store.stats()
