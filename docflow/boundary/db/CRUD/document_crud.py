"""
Document CRUD operations.

Dependencies: sqlalchemy, docflow.boundary.db.models
System role: Document persistence operations for job processing
"""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from docflow.boundary.db.CRUD.base_crud import BaseCRUD
from docflow.boundary.db.models.document_model import DocumentModel


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """CRUD operations for DocumentModel with lookups by upload id."""

    def __init__(self) -> None:
        super().__init__(DocumentModel)

    async def get_by_file_id(self, session: AsyncSession, file_id: str) -> DocumentModel | None:
        """
        Retrieve a document by its upload identifier.

        Args:
            session: Async database session
            file_id: Upload identifier

        Returns:
            DocumentModel if found, None otherwise
        """
        stmt = select(DocumentModel).where(DocumentModel.file_id == file_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_by_file_id(self, session: AsyncSession, file_id: str) -> bool:
        """Delete a document by upload identifier. Returns True if a row was removed."""
        stmt = delete(DocumentModel).where(DocumentModel.file_id == file_id)
        result = await session.execute(stmt)
        return result.rowcount > 0


document_crud = DocumentCRUD()
