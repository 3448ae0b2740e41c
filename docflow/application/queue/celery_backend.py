"""
Celery job backend.

Each job is a row in the jobs table whose UUID is also the Celery task id.
The worker task (docflow.workers.tasks.document_processing) moves the row
through active -> completed/failed and writes progress as it goes, so
status reads never touch the broker.

Dependencies: celery, sqlalchemy, docflow.boundary.db
System role: Durable job queue backend
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

from celery import Celery
from sqlalchemy.ext.asyncio import async_sessionmaker

from docflow.application.queue.base import build_status_record
from docflow.boundary.db.CRUD.job_crud import job_crud
from docflow.boundary.db.models.job_model import JobModel
from docflow.core.exceptions import QueueError
from docflow.models.job import JobPayload, JobResult, JobStatus, JobStatusRecord, QueueStats
from docflow.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

PROCESS_DOCUMENTS_TASK = "docflow.process_documents"


def is_broker_reachable(celery_app: Celery, timeout: float = 2.0) -> bool:
    """
    Check once whether the Celery broker accepts connections.

    Args:
        celery_app: Configured Celery application
        timeout: Seconds to wait for the connection

    Returns:
        bool: True if a connection could be established
    """
    try:
        with celery_app.connection_for_write() as conn:
            conn.ensure_connection(max_retries=1, timeout=timeout)
        return True
    except Exception as e:
        log_exception_with_context(
            logger,
            f"{__name__}:is_broker_reachable - Celery broker unreachable",
            e,
            level=logging.WARNING,
            broker=celery_app.conf.broker_url,
        )
        return False


def _parse_job_id(job_id: str) -> UUID | None:
    try:
        return UUID(job_id)
    except ValueError:
        return None


def job_to_status(job: JobModel) -> JobStatusRecord:
    """Build the status view of a job row."""
    return build_status_record(
        job_id=str(job.id),
        payload=JobPayload.model_validate(job.payload),
        status=JobStatus(job.status),
        progress=job.progress,
        created_at=job.created_at,
        updated_at=job.updated_at,
        result=JobResult.model_validate(job.result) if job.result else None,
        error=job.error,
    )


class CeleryJobBackend:
    """Jobs table plus Celery task dispatch."""

    def __init__(
        self,
        session_factory: async_sessionmaker,
        celery_app: Celery,
        completed_max_age: timedelta = timedelta(hours=24),
        failed_max_age: timedelta = timedelta(days=7),
    ) -> None:
        """
        Initialize Celery backend.

        Args:
            session_factory: Session factory for the jobs table
            celery_app: Celery application used to dispatch and revoke tasks
            completed_max_age: Cleanup age for completed jobs
            failed_max_age: Cleanup age for failed jobs
        """
        self._session_factory = session_factory
        self._celery_app = celery_app
        self._completed_max_age = completed_max_age
        self._failed_max_age = failed_max_age

    async def submit(self, payload: JobPayload) -> str:
        """
        Persist a waiting job row and dispatch the worker task.

        Raises:
            QueueError: If the row cannot be written or the task cannot be sent
        """
        try:
            async with self._session_factory() as session:
                job = await job_crud.create(
                    session,
                    type=payload.type,
                    batch_id=payload.batch_id,
                    status=JobStatus.WAITING,
                    progress=0,
                    payload=payload.to_wire(),
                )
                await session.commit()
        except Exception as e:
            raise QueueError(f"Failed to persist job: {e}") from e

        job_id = str(job.id)
        try:
            await asyncio.to_thread(
                self._celery_app.send_task,
                PROCESS_DOCUMENTS_TASK,
                args=[job_id],
                task_id=job_id,
            )
        except Exception as e:
            await self._discard(job.id)
            raise QueueError(f"Failed to dispatch job: {e}", job_id=job_id) from e

        logger.info(
            f"{__name__}:submit - Dispatched Celery job {job_id} "
            f"(batch={payload.batch_id}, files={len(payload.files)})"
        )
        return job_id

    async def _discard(self, job_uuid: UUID) -> None:
        try:
            async with self._session_factory() as session:
                await job_crud.delete_by_id(session, job_uuid)
                await session.commit()
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:_discard - Failed to remove undispatched job row",
                e,
                level=logging.WARNING,
                job_id=str(job_uuid),
            )

    async def get_status(self, job_id: str) -> JobStatusRecord | None:
        job_uuid = _parse_job_id(job_id)
        if job_uuid is None:
            return None
        async with self._session_factory() as session:
            job = await job_crud.get_by_id(session, job_uuid)
            return job_to_status(job) if job is not None else None

    async def list_batch(self, batch_id: str) -> list[JobStatusRecord]:
        async with self._session_factory() as session:
            jobs = await job_crud.get_by_batch_id(session, batch_id)
            return [job_to_status(job) for job in jobs]

    async def cancel(self, job_id: str) -> bool:
        """Remove the job row and revoke its task, whatever its state."""
        job_uuid = _parse_job_id(job_id)
        if job_uuid is None:
            return False

        async with self._session_factory() as session:
            deleted = await job_crud.delete_by_id(session, job_uuid)
            await session.commit()
        if not deleted:
            return False

        try:
            await asyncio.to_thread(self._celery_app.control.revoke, job_id)
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:cancel - Failed to revoke Celery task",
                e,
                level=logging.WARNING,
                job_id=job_id,
            )
        logger.info(f"{__name__}:cancel - Cancelled Celery job {job_id}")
        return True

    async def cleanup(self, now: datetime | None = None) -> int:
        """Prune completed jobs past their max age and failed jobs past theirs."""
        now = now or datetime.now(timezone.utc)
        async with self._session_factory() as session:
            removed = await job_crud.delete_older_than(
                session, JobStatus.COMPLETED, now - self._completed_max_age
            )
            removed += await job_crud.delete_older_than(
                session, JobStatus.FAILED, now - self._failed_max_age
            )
            await session.commit()

        if removed:
            logger.info(f"{__name__}:cleanup - Pruned {removed} Celery job rows")
        return removed

    async def stats(self) -> QueueStats:
        async with self._session_factory() as session:
            counts = await job_crud.count_by_status(session)
        return QueueStats(
            waiting=counts[JobStatus.WAITING],
            active=counts[JobStatus.ACTIVE],
            completed=counts[JobStatus.COMPLETED],
            failed=counts[JobStatus.FAILED],
            total=sum(counts.values()),
        )
