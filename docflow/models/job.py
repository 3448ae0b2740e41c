"""
Job domain models and schemas.

Job submission payload, per-file outcomes and status records. Field names
are snake_case in Python and camelCase on the wire.

Dependencies: pydantic
System role: Job queue API contracts
"""

import enum
from datetime import datetime
from typing import Any

from pydantic import Field

from docflow.models.common import CamelModel


class JobType(str, enum.Enum):
    """Job type tag carried by every payload."""

    PROCESS_SINGLE_DOCUMENT = "process_single_document"
    PROCESS_BATCH_DOCUMENTS = "process_batch_documents"
    GENERATE_SUMMARY = "generate_summary"
    EXTRACT_KEYWORDS = "extract_keywords"
    VECTORIZE_DOCUMENT = "vectorize_document"


class JobStatus(str, enum.Enum):
    """
    Job execution states.

    WAITING: Submitted, not yet picked up
    ACTIVE: Being processed by a worker
    COMPLETED: Finished; result holds per-file outcomes
    FAILED: Job-level failure; error holds the message
    """

    WAITING = "waiting"
    ACTIVE = "active"
    COMPLETED = "completed"
    FAILED = "failed"


class FileResultStatus(str, enum.Enum):
    """Per-file outcome."""

    COMPLETED = "completed"
    FAILED = "failed"


class FileDescriptor(CamelModel):
    """An uploaded file awaiting processing."""

    file_id: str
    original_name: str
    file_path: str
    file_size: int = 0
    mime_type: str


class ProcessingOptions(CamelModel):
    """Optional processing steps requested for a job."""

    generate_summary: bool = False
    extract_keywords: bool = False
    vectorize: bool = False
    delete_after_processing: bool = False


class JobPayload(CamelModel):
    """Job submission payload (the contract between callers and the queue)."""

    type: JobType
    batch_id: str | None = None
    user_id: str | None = None
    files: list[FileDescriptor] = Field(default_factory=list)
    options: ProcessingOptions = Field(default_factory=ProcessingOptions)


class FileResult(CamelModel):
    """Outcome of processing one file inside a job."""

    file_id: str
    original_name: str
    status: FileResultStatus
    document: dict[str, Any] | None = None
    vectorized: bool | None = None
    error: str | None = None


class JobResult(CamelModel):
    """Result of a whole job."""

    batch_id: str | None = None
    total_files: int = 0
    processed_files: int = 0
    failed_files: int = 0
    results: list[FileResult] = Field(default_factory=list)


class JobStatusRecord(CamelModel):
    """Status response for a single job."""

    job_id: str
    batch_id: str | None = None
    status: JobStatus
    progress: int = Field(default=0, ge=0, le=100)
    total: int = 0
    processed: int = 0
    failed: int = 0
    current_file: str | None = None
    result: JobResult | None = None
    error: str | None = None
    created_at: datetime
    updated_at: datetime


class QueueStats(CamelModel):
    """Job counts per state."""

    waiting: int = 0
    active: int = 0
    completed: int = 0
    failed: int = 0
    total: int = 0
