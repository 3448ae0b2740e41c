"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from docflow.boundary.db.CRUD import chunk_crud, document_crud, job_crud

    async with session_factory() as session:
        rows = await chunk_crud.get_by_document_id(session, "doc_1")
"""

from docflow.boundary.db.CRUD.base_crud import BaseCRUD
from docflow.boundary.db.CRUD.chunk_crud import ChunkCRUD, chunk_crud
from docflow.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud
from docflow.boundary.db.CRUD.job_crud import JobCRUD, job_crud

__all__ = [
    "BaseCRUD",
    "ChunkCRUD",
    "chunk_crud",
    "DocumentCRUD",
    "document_crud",
    "JobCRUD",
    "job_crud",
]
