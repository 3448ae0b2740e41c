"""
Document vectorizer.

Drives chunking, embedding and vector storage for one document's text.

Dependencies: docflow.core.document_processing.tasks, docflow.boundary.vdb
System role: Vectorization orchestrator
"""

import logging
import time

from docflow.boundary.vdb.vector_store import VectorStore
from docflow.core.document_processing.tasks.chunking_task import ChunkingTask
from docflow.core.document_processing.tasks.embedding_task import EmbeddingTask
from docflow.models.chunk import VectorizationReport
from docflow.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class DocumentVectorizer:
    """
    Vectorize document text chunk by chunk.

    Chunks whose embedding comes back empty are skipped; the attempt as a
    whole still counts as a success. Callers must not assume every chunk
    has a vector.
    """

    def __init__(
        self,
        chunking_task: ChunkingTask,
        embedding_task: EmbeddingTask,
        vector_store: VectorStore,
    ) -> None:
        """
        Initialize vectorizer.

        Args:
            chunking_task: Text splitter
            embedding_task: Embedding provider with fallback
            vector_store: Chunk/vector persistence
        """
        self._chunking_task = chunking_task
        self._embedding_task = embedding_task
        self._vector_store = vector_store

    async def vectorize(self, document_id: str, text: str) -> bool:
        """
        Split, embed and store a document's text.

        Args:
            document_id: Owning document identifier
            text: Document text

        Returns:
            bool: True once every chunk was attempted, False on an unexpected error
        """
        try:
            await self.vectorize_with_report(document_id, text)
            return True
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:vectorize - Vectorization failed",
                e,
                document_id=document_id,
            )
            return False

    async def vectorize_with_report(self, document_id: str, text: str) -> VectorizationReport:
        """
        Vectorize and report how many chunks were stored or skipped.

        Args:
            document_id: Owning document identifier
            text: Document text

        Returns:
            VectorizationReport: Chunk counts for the attempt

        Raises:
            Exception: Propagates unexpected chunking/storage errors
        """
        start_time = time.perf_counter()
        chunks = self._chunking_task.split(text)
        report = VectorizationReport(document_id=document_id, chunk_count=len(chunks))
        logger.info(
            f"{__name__}:vectorize_with_report - Document {document_id} split into {len(chunks)} chunks"
        )

        for chunk_index, chunk in enumerate(chunks):
            embedding = await self._embedding_task.embed(chunk)
            if embedding is None:
                logger.warning(
                    f"{__name__}:vectorize_with_report - No embedding for chunk {chunk_index} "
                    f"of document {document_id}, skipping"
                )
                report.skipped_chunks += 1
                continue

            saved = await self._vector_store.save_chunk_vector(
                document_id, chunk, embedding, chunk_index
            )
            if saved:
                report.saved_chunks += 1
            else:
                report.failed_chunks += 1

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"{__name__}:vectorize_with_report - Document {document_id} vectorized: "
            f"saved={report.saved_chunks}, skipped={report.skipped_chunks}, "
            f"failed={report.failed_chunks}, "
            f"time={elapsed_ms:.1f}ms"
        )
        return report
