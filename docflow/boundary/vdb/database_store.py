"""
Durable chunk store backed by the document_chunks table.

Writes chunk metadata only: the table has no vector column, so similarity
search pairs durable rows with vectors held by the in-process store.
Chunks saved while the database is healthy therefore carry no vector and
are not returned by search.

Dependencies: sqlalchemy, docflow.boundary.db
System role: Durable tier of the vector store
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from docflow.boundary.db.CRUD.chunk_crud import chunk_crud
from docflow.boundary.db.models.chunk_model import DocumentChunkModel
from docflow.boundary.vdb.memory_store import MemoryChunkStore, compute_stats
from docflow.core.exceptions import VectorStoreError
from docflow.models.chunk import ChunkRecord, VectorStats, estimate_tokens

logger = logging.getLogger(__name__)


def _to_record(row: DocumentChunkModel) -> ChunkRecord:
    return ChunkRecord(
        document_id=row.document_id,
        chunk_index=row.chunk_index,
        content=row.content,
        page_number=row.page_number,
        token_count=row.token_count,
    )


class DatabaseChunkStore:
    """
    SQLAlchemy chunk store.

    Every SQLAlchemy failure is re-raised as VectorStoreError with the
    operation name so the failover wrapper can log it uniformly.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        memory_store: MemoryChunkStore,
    ) -> None:
        """
        Initialize database chunk store.

        Args:
            session_factory: Async session factory bound to the durable engine
            memory_store: In-process store holding raw vectors
        """
        self._session_factory = session_factory
        self._memory_store = memory_store

    async def save_chunk(
        self,
        document_id: str,
        content: str,
        vector: list[float],
        chunk_index: int,
        page_number: int | None = None,
    ) -> None:
        try:
            async with self._session_factory() as session:
                await chunk_crud.create(
                    session,
                    document_id=document_id,
                    chunk_index=chunk_index,
                    content=content,
                    page_number=page_number,
                    token_count=estimate_tokens(content),
                )
                await session.commit()
        except SQLAlchemyError as e:
            raise VectorStoreError(f"Failed to save chunk: {e}", operation="save") from e

    async def get_chunks(self, document_id: str) -> list[ChunkRecord]:
        try:
            async with self._session_factory() as session:
                rows = await chunk_crud.get_by_document_id(session, document_id)
                return [_to_record(row) for row in rows]
        except SQLAlchemyError as e:
            raise VectorStoreError(f"Failed to load chunks: {e}", operation="get_chunks") from e

    async def delete_document(self, document_id: str) -> None:
        try:
            async with self._session_factory() as session:
                deleted = await chunk_crud.delete_by_document_id(session, document_id)
                await session.commit()
        except SQLAlchemyError as e:
            raise VectorStoreError(f"Failed to delete chunks: {e}", operation="delete") from e

        await self._memory_store.delete_document(document_id)
        logger.info(
            f"{__name__}:delete_document - Deleted {deleted} chunk rows for document {document_id}"
        )

    async def search_candidates(
        self,
        document_id: str | None = None,
    ) -> list[tuple[ChunkRecord, list[float]]]:
        """Durable rows that also have an in-process vector."""
        try:
            async with self._session_factory() as session:
                if document_id is not None:
                    rows = await chunk_crud.get_by_document_id(session, document_id)
                else:
                    rows = await chunk_crud.get_all(session)
        except SQLAlchemyError as e:
            raise VectorStoreError(f"Failed to list chunks: {e}", operation="search") from e

        candidates = []
        for row in rows:
            vector = self._memory_store.get_vector(row.document_id, row.chunk_index)
            if vector is not None:
                candidates.append((_to_record(row), vector))
        return candidates

    async def stats(self) -> VectorStats:
        try:
            async with self._session_factory() as session:
                total_chunks = await chunk_crud.count_chunks(session)
                total_documents = await chunk_crud.count_documents(session)
        except SQLAlchemyError as e:
            raise VectorStoreError(f"Failed to compute stats: {e}", operation="stats") from e
        return compute_stats(total_chunks, total_documents)
