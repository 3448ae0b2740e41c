"""
Document processing pipeline.

Text extraction, chunking, embedding (with deterministic fallback) and the
DocumentVectorizer (docflow.core.document_processing.vectorizer) that ties
them to the vector store.
"""

from docflow.core.document_processing.fallback_embeddings import DeterministicEmbeddings
from docflow.core.document_processing.tasks import ChunkingTask, EmbeddingTask, ParsingTask

__all__ = [
    "ChunkingTask",
    "DeterministicEmbeddings",
    "EmbeddingTask",
    "ParsingTask",
]
