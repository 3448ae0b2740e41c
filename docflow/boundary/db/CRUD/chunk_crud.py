"""
Document chunk CRUD operations.

Dependencies: sqlalchemy, docflow.boundary.db.models
System role: Durable chunk persistence operations
"""

from typing import Sequence

from sqlalchemy import delete, distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from docflow.boundary.db.CRUD.base_crud import BaseCRUD
from docflow.boundary.db.models.chunk_model import DocumentChunkModel


class ChunkCRUD(BaseCRUD[DocumentChunkModel]):
    """CRUD operations for DocumentChunkModel, keyed by document id."""

    def __init__(self) -> None:
        super().__init__(DocumentChunkModel)

    async def get_by_document_id(
        self,
        session: AsyncSession,
        document_id: str,
    ) -> Sequence[DocumentChunkModel]:
        """
        Retrieve all chunks of a document ordered by chunk index.

        Args:
            session: Async database session
            document_id: Owning document id

        Returns:
            Chunk rows sorted ascending by chunk_index
        """
        stmt = (
            select(DocumentChunkModel)
            .where(DocumentChunkModel.document_id == document_id)
            .order_by(DocumentChunkModel.chunk_index)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def delete_by_document_id(self, session: AsyncSession, document_id: str) -> int:
        """
        Delete all chunks of a document.

        Returns:
            Number of rows removed
        """
        stmt = delete(DocumentChunkModel).where(DocumentChunkModel.document_id == document_id)
        result = await session.execute(stmt)
        return result.rowcount or 0

    async def count_chunks(self, session: AsyncSession) -> int:
        """Total number of chunk rows."""
        result = await session.execute(select(func.count(DocumentChunkModel.id)))
        return result.scalar_one()

    async def count_documents(self, session: AsyncSession) -> int:
        """Number of distinct documents owning at least one chunk."""
        result = await session.execute(
            select(func.count(distinct(DocumentChunkModel.document_id)))
        )
        return result.scalar_one()


chunk_crud = ChunkCRUD()
