"""
In-process job backend.

Jobs are held in a dict and executed one at a time, in submission order,
by a single asyncio drain task. No retries, no mid-job cancellation.

Dependencies: asyncio, docflow.application.services.job_processor
System role: Fallback job queue when Celery is unavailable
"""

import asyncio
import itertools
import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

from docflow.application.queue.base import build_status_record, count_statuses
from docflow.models.job import JobPayload, JobResult, JobStatus, JobStatusRecord, QueueStats
from docflow.observability.log_utils import log_exception_with_context

if TYPE_CHECKING:
    from docflow.application.services.job_processor import JobProcessor

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class JobRecord:
    """Live state of an in-process job."""

    id: str
    payload: JobPayload
    status: JobStatus = JobStatus.WAITING
    progress: int = 0
    current_file: str | None = None
    result: JobResult | None = None
    error: str | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def touch(self) -> None:
        self.updated_at = _utcnow()

    def to_status(self) -> JobStatusRecord:
        return build_status_record(
            job_id=self.id,
            payload=self.payload,
            status=self.status,
            progress=self.progress,
            created_at=self.created_at,
            updated_at=self.updated_at,
            result=self.result,
            error=self.error,
            current_file=self.current_file,
        )


class InProcessJobBackend:
    """
    Asyncio FIFO job queue.

    The deque and the draining flag are only mutated under the lock; at most
    one drain task runs at a time.
    """

    def __init__(
        self,
        processor: "JobProcessor",
        completed_max_age: timedelta = timedelta(hours=24),
    ) -> None:
        """
        Initialize in-process backend.

        Args:
            processor: Per-file job processor
            completed_max_age: Age after which completed jobs are pruned
        """
        self._processor = processor
        self._completed_max_age = completed_max_age
        self._jobs: dict[str, JobRecord] = {}
        self._queue: deque[str] = deque()
        self._lock = asyncio.Lock()
        self._ids = itertools.count(1)
        self._is_draining = False
        self._drain_task: asyncio.Task | None = None

    @property
    def is_draining(self) -> bool:
        return self._is_draining

    async def submit(self, payload: JobPayload) -> str:
        """Queue a job and make sure the drain task is running."""
        async with self._lock:
            job_id = f"job_{next(self._ids)}"
            self._jobs[job_id] = JobRecord(id=job_id, payload=payload)
            self._queue.append(job_id)
            if not self._is_draining:
                self._is_draining = True
                self._drain_task = asyncio.create_task(self._drain())

        logger.info(
            f"{__name__}:submit - Queued in-process job {job_id} "
            f"(batch={payload.batch_id}, files={len(payload.files)})"
        )
        return job_id

    async def _drain(self) -> None:
        while True:
            async with self._lock:
                if not self._queue:
                    self._is_draining = False
                    return
                job = self._jobs.get(self._queue.popleft())
            if job is not None:
                await self._run(job)

    async def _run(self, job: JobRecord) -> None:
        job.status = JobStatus.ACTIVE
        job.touch()

        async def on_progress(progress: int, current_file: str | None) -> None:
            job.progress = progress
            job.current_file = current_file
            job.touch()

        try:
            job.result = await self._processor.process(job.payload, on_progress)
            job.status = JobStatus.COMPLETED
            job.progress = 100
            job.current_file = None
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:_run - In-process job {job.id} failed",
                e,
                job_id=job.id,
            )
            job.status = JobStatus.FAILED
            job.error = str(e)
        job.touch()

    async def get_status(self, job_id: str) -> JobStatusRecord | None:
        job = self._jobs.get(job_id)
        return job.to_status() if job is not None else None

    async def list_batch(self, batch_id: str) -> list[JobStatusRecord]:
        return [
            job.to_status()
            for job in list(self._jobs.values())
            if job.payload.batch_id == batch_id
        ]

    async def cancel(self, job_id: str) -> bool:
        """Remove a job that is still waiting. Active or finished jobs are left alone."""
        async with self._lock:
            job = self._jobs.get(job_id)
            if job is None or job.status != JobStatus.WAITING:
                return False
            if job_id in self._queue:
                self._queue.remove(job_id)
            del self._jobs[job_id]

        logger.info(f"{__name__}:cancel - Cancelled in-process job {job_id}")
        return True

    async def cleanup(self, now: datetime | None = None) -> int:
        """
        Prune completed jobs older than the configured age.

        Failed jobs are kept so failures stay visible.
        """
        cutoff = (now or _utcnow()) - self._completed_max_age
        async with self._lock:
            expired = [
                job_id
                for job_id, job in self._jobs.items()
                if job.status == JobStatus.COMPLETED and job.updated_at < cutoff
            ]
            for job_id in expired:
                del self._jobs[job_id]

        if expired:
            logger.info(f"{__name__}:cleanup - Pruned {len(expired)} completed in-process jobs")
        return len(expired)

    async def stats(self) -> QueueStats:
        return count_statuses([job.status for job in list(self._jobs.values())])

    async def wait_until_idle(self) -> None:
        """Wait until the queue is empty and no job is running."""
        while self._drain_task is not None and not self._drain_task.done():
            await self._drain_task
