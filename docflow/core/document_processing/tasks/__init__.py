"""
Pipeline tasks: text extraction, chunking and embedding.
"""

from docflow.core.document_processing.tasks.chunking_task import ChunkingTask
from docflow.core.document_processing.tasks.embedding_task import EmbeddingTask
from docflow.core.document_processing.tasks.parsing_task import ParsingTask

__all__ = ["ChunkingTask", "EmbeddingTask", "ParsingTask"]
