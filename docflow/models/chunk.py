"""
Chunk domain models.

Chunk records, similarity search results and vector statistics.

Dependencies: pydantic
System role: Data structures for chunk storage and retrieval
"""

import math

from pydantic import BaseModel, Field


def estimate_tokens(content: str) -> int:
    """Rough token estimate used for chunk records (four characters per token)."""
    return math.ceil(len(content) / 4)


class ChunkRecord(BaseModel):
    """A stored chunk of a document, correlated with its vector by (document_id, chunk_index)."""

    document_id: str = Field(description="Owning document identifier")
    chunk_index: int = Field(ge=0, description="0-based position within the document")
    content: str = Field(description="Chunk text content")
    page_number: int | None = Field(default=None, description="Page in the source document")
    token_count: int | None = Field(default=None, description="Estimated token count")


class SearchResult(BaseModel):
    """Single result from semantic search."""

    content: str
    similarity: float
    document_id: str
    chunk_index: int
    page_number: int | None = None


class VectorStats(BaseModel):
    """Aggregate chunk statistics."""

    total_chunks: int = 0
    total_documents: int = 0
    average_chunks_per_document: float = 0.0


class VectorizationReport(BaseModel):
    """Outcome of vectorizing one document."""

    document_id: str
    chunk_count: int = Field(default=0, description="Chunks produced by the splitter")
    saved_chunks: int = Field(default=0, description="Chunks persisted with a vector")
    skipped_chunks: int = Field(default=0, description="Chunks without an embedding")
    failed_chunks: int = Field(default=0, description="Chunks the vector store did not save")


class ChunkPreview(BaseModel):
    """Chunk preview entry for debugging the splitter."""

    index: int
    content: str
    length: int
