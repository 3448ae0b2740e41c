"""
Document service orchestrator.

Creates, looks up and deletes processed document records. The database is
tried first; on failure the in-process store answers instead.

Dependencies: docflow.boundary.document_store, docflow.boundary.vdb.failover
System role: Document store collaborator for job processing
"""

import logging

from sqlalchemy.ext.asyncio import async_sessionmaker

from docflow.boundary.document_store import DatabaseDocumentStore, MemoryDocumentStore
from docflow.boundary.vdb.failover import call_with_failover
from docflow.models.document import DocumentCreate, DocumentRecord

logger = logging.getLogger(__name__)


class DocumentService:
    """
    Document service orchestrator.

    Owns its in-process store, so separate instances never share records.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker | None = None,
        memory_store: MemoryDocumentStore | None = None,
    ) -> None:
        """
        Initialize document service.

        Args:
            session_factory: Durable session factory (None keeps documents in memory only)
            memory_store: Optional in-process store (created if None)
        """
        self._durable = DatabaseDocumentStore(session_factory) if session_factory else None
        self._memory = memory_store or MemoryDocumentStore()

    async def create_document(self, document: DocumentCreate) -> DocumentRecord:
        """
        Persist a processed upload.

        Args:
            document: Fields of the new record

        Returns:
            DocumentRecord: Stored record with generated id and timestamps
        """
        record = await call_with_failover(
            "create_document",
            self._durable,
            self._memory,
            lambda store: store.create(document),
        )
        logger.info(
            f"{__name__}:create_document - Created document {record.id} "
            f"for file {document.file_id}"
        )
        return record

    async def get_document_by_file_id(self, file_id: str) -> DocumentRecord | None:
        """Look up a document by upload id."""
        return await call_with_failover(
            "get_document_by_file_id",
            self._durable,
            self._memory,
            lambda store: store.get_by_file_id(file_id),
        )

    async def delete_document(self, file_id: str) -> bool:
        """Delete a document by upload id. Returns True if a record was removed."""
        return await call_with_failover(
            "delete_document",
            self._durable,
            self._memory,
            lambda store: store.delete(file_id),
        )
