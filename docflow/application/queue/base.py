"""
Queue backend contract.

Dependencies: docflow.models.job
System role: Strategy interface selected once by JobService
"""

import math
from datetime import datetime
from typing import Protocol

from docflow.models.job import JobPayload, JobResult, JobStatus, JobStatusRecord, QueueStats


class JobBackend(Protocol):
    """Operations every queue backend provides."""

    async def submit(self, payload: JobPayload) -> str: ...

    async def get_status(self, job_id: str) -> JobStatusRecord | None: ...

    async def list_batch(self, batch_id: str) -> list[JobStatusRecord]: ...

    async def cancel(self, job_id: str) -> bool: ...

    async def cleanup(self) -> int: ...

    async def stats(self) -> QueueStats: ...


def progress_percent(done: int, total: int) -> int:
    """Percentage of done over total, halves rounded up. 0 when total is 0."""
    if not total:
        return 0
    return math.floor(done / total * 100 + 0.5)


def build_status_record(
    job_id: str,
    payload: JobPayload,
    status: JobStatus,
    progress: int,
    created_at: datetime,
    updated_at: datetime,
    result: JobResult | None = None,
    error: str | None = None,
    current_file: str | None = None,
) -> JobStatusRecord:
    """
    Build the status view of a job.

    total is the payload's file count; processed and failed come from the
    result once there is one.
    """
    return JobStatusRecord(
        job_id=job_id,
        batch_id=payload.batch_id,
        status=status,
        progress=progress,
        total=len(payload.files),
        processed=result.processed_files if result else 0,
        failed=result.failed_files if result else 0,
        current_file=current_file,
        result=result,
        error=error,
        created_at=created_at,
        updated_at=updated_at,
    )


def count_statuses(statuses: list[JobStatus]) -> QueueStats:
    """Tally job statuses into QueueStats."""
    stats = QueueStats(total=len(statuses))
    for status in statuses:
        setattr(stats, status.value, getattr(stats, status.value) + 1)
    return stats
