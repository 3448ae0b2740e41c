"""
Domain models and wire schemas.

Exports chunk, document, job and batch models shared by the pipeline,
the storage tiers and the job queue.
"""

from docflow.models.batch import BatchJobDetail, BatchOverallStatus, BatchStatus, BatchSubmission
from docflow.models.chunk import ChunkPreview, ChunkRecord, SearchResult, VectorizationReport, VectorStats
from docflow.models.document import DocumentCreate, DocumentRecord, ExtractedText
from docflow.models.job import (
    FileDescriptor,
    FileResult,
    FileResultStatus,
    JobPayload,
    JobResult,
    JobStatus,
    JobStatusRecord,
    JobType,
    ProcessingOptions,
    QueueStats,
)

__all__ = [
    "BatchJobDetail",
    "BatchOverallStatus",
    "BatchStatus",
    "BatchSubmission",
    "ChunkPreview",
    "ChunkRecord",
    "SearchResult",
    "VectorizationReport",
    "VectorStats",
    "DocumentCreate",
    "DocumentRecord",
    "ExtractedText",
    "FileDescriptor",
    "FileResult",
    "FileResultStatus",
    "JobPayload",
    "JobResult",
    "JobStatus",
    "JobStatusRecord",
    "JobType",
    "ProcessingOptions",
    "QueueStats",
]
