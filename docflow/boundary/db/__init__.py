"""
Relational storage for the durable tier.

Exports the declarative base, connection helpers and ORM models.
"""

from docflow.boundary.db.base import Base, TimestampMixin, UUIDMixin
from docflow.boundary.db.connection import (
    create_all_tables,
    get_async_engine,
    get_async_session_factory,
)
from docflow.boundary.db.models import DocumentChunkModel, DocumentModel, JobModel

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "create_all_tables",
    "get_async_engine",
    "get_async_session_factory",
    "DocumentChunkModel",
    "DocumentModel",
    "JobModel",
]
