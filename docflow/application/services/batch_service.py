"""
Batch service orchestrator.

Submits multi-file batches as one job and derives batch progress from the
jobs that share a batch id. Batches themselves are never stored.

Dependencies: docflow.application.services.job_service
System role: Batch progress aggregation
"""

import logging
import uuid
from datetime import datetime, timezone

from docflow.application.queue.base import progress_percent
from docflow.application.services.job_service import JobService
from docflow.core.exceptions import ValidationError
from docflow.models.batch import BatchJobDetail, BatchOverallStatus, BatchStatus, BatchSubmission
from docflow.models.job import (
    FileDescriptor,
    JobPayload,
    JobStatus,
    JobStatusRecord,
    JobType,
    ProcessingOptions,
)

logger = logging.getLogger(__name__)


def aggregate_statuses(batch_id: str, jobs: list[JobStatusRecord]) -> BatchStatus:
    """
    Combine per-job statuses into a batch status.

    completed when every job completed, else partial when any failed, else
    processing when any is active, else waiting.
    """
    total_files = sum(job.total for job in jobs)
    processed_files = sum(job.processed for job in jobs)
    failed_files = sum(job.failed for job in jobs)
    progress = progress_percent(processed_files, total_files)

    statuses = [job.status for job in jobs]
    if all(status == JobStatus.COMPLETED for status in statuses):
        overall = BatchOverallStatus.COMPLETED
    elif JobStatus.FAILED in statuses:
        overall = BatchOverallStatus.PARTIAL
    elif JobStatus.ACTIVE in statuses:
        overall = BatchOverallStatus.PROCESSING
    else:
        overall = BatchOverallStatus.WAITING

    return BatchStatus(
        batch_id=batch_id,
        status=overall,
        progress=progress,
        total_files=total_files,
        processed_files=processed_files,
        failed_files=failed_files,
        jobs=[
            BatchJobDetail(
                job_id=job.job_id,
                status=job.status,
                progress=job.progress,
                total=job.total,
                processed=job.processed,
                failed=job.failed,
                error=job.error,
                updated_at=job.updated_at,
            )
            for job in jobs
        ],
    )


class BatchService:
    """Batch submission, aggregation and cancellation."""

    def __init__(self, job_service: JobService) -> None:
        self._job_service = job_service

    async def create_batch(
        self,
        files: list[FileDescriptor],
        options: ProcessingOptions | None = None,
        user_id: str | None = None,
        job_type: JobType = JobType.PROCESS_BATCH_DOCUMENTS,
    ) -> BatchSubmission:
        """
        Submit files as one batch job.

        Args:
            files: Uploaded files
            options: Processing options
            user_id: Owner of the resulting documents
            job_type: Job type tag

        Returns:
            BatchSubmission: Batch and job ids

        Raises:
            ValidationError: If no files were given
        """
        if not files:
            raise ValidationError("A batch needs at least one file", field="files")

        options = options or ProcessingOptions()
        batch_id = str(uuid.uuid4())
        job_id = await self._job_service.submit(
            JobPayload(
                type=job_type,
                batch_id=batch_id,
                user_id=user_id,
                files=files,
                options=options,
            )
        )
        logger.info(
            f"{__name__}:create_batch - Batch {batch_id} submitted as job {job_id} "
            f"with {len(files)} files"
        )
        return BatchSubmission(
            batch_id=batch_id,
            job_id=job_id,
            total_files=len(files),
            files=files,
            options=options,
            created_at=datetime.now(timezone.utc),
        )

    async def aggregate(self, batch_id: str) -> BatchStatus | None:
        """Batch status, or None when no job carries the batch id."""
        jobs = await self._job_service.get_batch_status(batch_id)
        if not jobs:
            return None
        return aggregate_statuses(batch_id, jobs)

    async def cancel_batch(self, batch_id: str) -> int | None:
        """
        Cancel the waiting jobs of a batch.

        Returns:
            int | None: Number of jobs cancelled, None when the batch is unknown
        """
        jobs = await self._job_service.get_batch_status(batch_id)
        if not jobs:
            return None

        cancelled = 0
        for job in jobs:
            if job.status == JobStatus.WAITING and await self._job_service.cancel(job.job_id):
                cancelled += 1

        logger.info(f"{__name__}:cancel_batch - Cancelled {cancelled} jobs of batch {batch_id}")
        return cancelled
