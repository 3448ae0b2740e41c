"""
Document chunk ORM model.

Stores chunk metadata for the durable tier. There is no vector column:
raw vectors stay in the in-process store keyed by (document_id, chunk_index).

Dependencies: sqlalchemy, docflow.boundary.db.base
System role: Durable chunk persistence
"""

from sqlalchemy import Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from docflow.boundary.db.base import Base, TimestampMixin, UUIDMixin


class DocumentChunkModel(Base, UUIDMixin, TimestampMixin):
    """
    Chunk row belonging to one document.

    Attributes:
        id: UUID primary key (auto-generated)
        document_id: Opaque owning document id
        chunk_index: 0-based position, join key with the vector
        content: Chunk text
        page_number: Optional page in the source document
        token_count: ceil(len(content) / 4)
    """

    __tablename__ = "document_chunks"
    __table_args__ = (
        Index("ix_document_chunks_document_id_chunk_index", "document_id", "chunk_index"),
    )

    document_id: Mapped[str] = mapped_column(String(64), nullable=False)
    chunk_index: Mapped[int] = mapped_column(Integer, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    page_number: Mapped[int | None] = mapped_column(Integer, nullable=True)
    token_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
