"""
Document record storage tiers.

MemoryDocumentStore keeps records in process with ids doc_1, doc_2, ...;
DatabaseDocumentStore persists them in the documents table.

Dependencies: sqlalchemy, docflow.boundary.db
System role: Document persistence for job processing
"""

import itertools
import threading
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from docflow.boundary.db.CRUD.document_crud import document_crud
from docflow.boundary.db.models.document_model import DocumentModel
from docflow.core.exceptions import DocumentStoreError
from docflow.models.document import DocumentCreate, DocumentRecord


def _to_record(row: DocumentModel) -> DocumentRecord:
    return DocumentRecord(
        id=str(row.id),
        file_id=row.file_id,
        original_name=row.original_name,
        file_size=row.file_size,
        page_count=row.page_count,
        text_content=row.text_content,
        file_path=row.file_path,
        user_id=row.user_id,
        metadata=row.metadata_ or {},
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class MemoryDocumentStore:
    """In-process document records keyed by file id."""

    def __init__(self) -> None:
        self._documents: dict[str, DocumentRecord] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    async def create(self, document: DocumentCreate) -> DocumentRecord:
        now = datetime.now(timezone.utc)
        with self._lock:
            record = DocumentRecord(
                id=f"doc_{next(self._ids)}",
                created_at=now,
                updated_at=now,
                **document.model_dump(),
            )
            self._documents[document.file_id] = record
        return record

    async def get_by_file_id(self, file_id: str) -> DocumentRecord | None:
        with self._lock:
            return self._documents.get(file_id)

    async def delete(self, file_id: str) -> bool:
        with self._lock:
            return self._documents.pop(file_id, None) is not None


class DatabaseDocumentStore:
    """Document records in the documents table."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    async def create(self, document: DocumentCreate) -> DocumentRecord:
        fields = document.model_dump()
        fields["metadata_"] = fields.pop("metadata")
        try:
            async with self._session_factory() as session:
                row = await document_crud.create(session, **fields)
                await session.commit()
                return _to_record(row)
        except SQLAlchemyError as e:
            raise DocumentStoreError(
                f"Failed to create document: {e}", {"file_id": document.file_id}
            ) from e

    async def get_by_file_id(self, file_id: str) -> DocumentRecord | None:
        try:
            async with self._session_factory() as session:
                row = await document_crud.get_by_file_id(session, file_id)
                return _to_record(row) if row is not None else None
        except SQLAlchemyError as e:
            raise DocumentStoreError(
                f"Failed to load document: {e}", {"file_id": file_id}
            ) from e

    async def delete(self, file_id: str) -> bool:
        try:
            async with self._session_factory() as session:
                deleted = await document_crud.delete_by_file_id(session, file_id)
                await session.commit()
                return deleted
        except SQLAlchemyError as e:
            raise DocumentStoreError(
                f"Failed to delete document: {e}", {"file_id": file_id}
            ) from e
