"""
Database models package.

Exports:
  - DocumentChunkModel: Chunk metadata rows
  - DocumentModel: Processed upload rows
  - JobModel: Celery job tracking rows

Dependencies: sqlalchemy, docflow.boundary.db.base
System role: Database model definitions for domain entities
"""

from docflow.boundary.db.models.chunk_model import DocumentChunkModel
from docflow.boundary.db.models.document_model import DocumentModel
from docflow.boundary.db.models.job_model import JobModel

__all__ = [
    "DocumentChunkModel",
    "DocumentModel",
    "JobModel",
]
