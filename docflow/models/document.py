"""
Document domain models.

Dependencies: pydantic
System role: Document store contract used by job processing
"""

from datetime import datetime

from pydantic import BaseModel, Field


class ExtractedText(BaseModel):
    """Text extracted from an uploaded file."""

    text_content: str = ""
    page_count: int = 1


class DocumentCreate(BaseModel):
    """Fields required to persist a processed upload."""

    file_id: str
    original_name: str
    file_size: int
    page_count: int = 1
    text_content: str | None = None
    file_path: str
    user_id: str | None = None
    metadata: dict = Field(default_factory=dict)


class DocumentRecord(DocumentCreate):
    """Persisted document."""

    id: str
    created_at: datetime
    updated_at: datetime
