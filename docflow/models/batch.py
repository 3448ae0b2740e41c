"""
Batch domain models.

A batch is never stored: its status is aggregated from the jobs that share
a batch id.

Dependencies: pydantic
System role: Batch progress API contracts
"""

import enum
from datetime import datetime

from pydantic import Field

from docflow.models.common import CamelModel
from docflow.models.job import FileDescriptor, JobStatus, ProcessingOptions


class BatchOverallStatus(str, enum.Enum):
    """Derived batch status."""

    COMPLETED = "completed"
    PARTIAL = "partial"
    PROCESSING = "processing"
    WAITING = "waiting"


class BatchJobDetail(CamelModel):
    """Per-job line of a batch status report."""

    job_id: str
    status: JobStatus
    progress: int
    total: int
    processed: int
    failed: int
    error: str | None = None
    updated_at: datetime


class BatchStatus(CamelModel):
    """Aggregated batch progress."""

    batch_id: str
    status: BatchOverallStatus
    progress: int = 0
    total_files: int = 0
    processed_files: int = 0
    failed_files: int = 0
    jobs: list[BatchJobDetail] = Field(default_factory=list)


class BatchSubmission(CamelModel):
    """Acknowledgement returned when a batch is queued."""

    batch_id: str
    job_id: str
    total_files: int
    files: list[FileDescriptor]
    options: ProcessingOptions
    created_at: datetime
