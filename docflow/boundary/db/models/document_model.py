"""
Document ORM model.

Represents a processed upload with its extracted text.

Dependencies: sqlalchemy, docflow.boundary.db.base
System role: Document persistence for job processing
"""

from sqlalchemy import JSON, BigInteger, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from docflow.boundary.db.base import Base, TimestampMixin, UUIDMixin


class DocumentModel(Base, UUIDMixin, TimestampMixin):
    """
    Document ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        file_id: Upload identifier (unique)
        original_name: Original filename
        file_size: Size in bytes
        page_count: Number of pages (1 for non-PDF)
        text_content: Extracted text
        file_path: Location of the uploaded file
        user_id: Optional owner
        metadata_: Free-form metadata (column "metadata")
    """

    __tablename__ = "documents"

    file_id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    original_name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    page_count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    text_content: Mapped[str | None] = mapped_column(Text, nullable=True)
    file_path: Mapped[str] = mapped_column(String(1024), nullable=False)
    user_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    metadata_: Mapped[dict] = mapped_column("metadata", JSON, nullable=False, default=dict)
