"""
Document processing Celery task.

Async task: process_documents(job_id)
Flow: load job row -> mark active -> process files (progress per file)
-> mark completed/failed -> prune old rows

Dependencies: celery, docflow.application, docflow.boundary.db, docflow.workers
System role: Durable job execution
"""

import asyncio
import logging
from uuid import UUID

from docflow.application.queue.celery_backend import PROCESS_DOCUMENTS_TASK
from docflow.boundary.db.CRUD.job_crud import job_crud
from docflow.core.exceptions import QueueError
from docflow.dependencies import ServiceContainer
from docflow.models.job import JobPayload, JobStatus
from docflow.workers import celery_app, queue_config, settings

logger = logging.getLogger(__name__)


async def run_job(
    container: ServiceContainer,
    job_id: str,
    is_last_attempt: bool = True,
) -> dict | None:
    """
    Execute one durable job.

    Args:
        container: Services for this run
        job_id: Job row id
        is_last_attempt: Whether a failure is final (otherwise the row goes back to waiting)

    Returns:
        dict | None: JobResult wire dict, None if the job was cancelled

    Raises:
        QueueError: If the database is not configured
        Exception: Job-level failures, re-raised so Celery can retry
    """
    session_factory = container.session_factory
    if session_factory is None:
        raise QueueError("Celery jobs require the database", job_id=job_id)

    job_uuid = UUID(job_id)
    async with session_factory() as session:
        job = await job_crud.mark_active(session, job_uuid)
        await session.commit()
    if job is None:
        logger.info(f"{__name__}:run_job - Job {job_id} no longer exists, skipping")
        return None

    payload = JobPayload.model_validate(job.payload)

    async def on_progress(progress: int, current_file: str | None) -> None:
        async with session_factory() as session:
            await job_crud.update_progress(session, job_uuid, progress)
            await session.commit()

    try:
        result = await container.job_processor.process(payload, on_progress)
    except Exception as e:
        async with session_factory() as session:
            if is_last_attempt:
                await job_crud.mark_failed(session, job_uuid, str(e))
                await job_crud.prune_terminal(session, JobStatus.FAILED, queue_config.keep_failed)
            else:
                await job_crud.update_by_id(
                    session, job_uuid, status=JobStatus.WAITING, error=str(e)
                )
            await session.commit()
        raise

    result_data = result.to_wire()
    async with session_factory() as session:
        await job_crud.mark_completed(session, job_uuid, result_data)
        await job_crud.prune_terminal(session, JobStatus.COMPLETED, queue_config.keep_completed)
        await session.commit()

    logger.info(
        f"{__name__}:run_job - Job {job_id} completed: "
        f"{result.processed_files} processed, {result.failed_files} failed"
    )
    return result_data


async def _run_with_fresh_container(job_id: str, is_last_attempt: bool) -> dict | None:
    # One engine per run: asyncio.run creates a new event loop for every task
    container = ServiceContainer(settings)
    try:
        return await run_job(container, job_id, is_last_attempt)
    finally:
        await container.aclose()


@celery_app.task(
    bind=True,
    name=PROCESS_DOCUMENTS_TASK,
    max_retries=queue_config.task_attempts - 1,
    autoretry_for=(Exception,),
    retry_backoff=queue_config.task_retry_backoff,
    retry_backoff_max=queue_config.task_retry_backoff_max,
    retry_jitter=False,
)
def process_documents(self, job_id: str):
    """
    Process a queued document job.

    Args:
        job_id: Job UUID as string (also the task id)

    Returns:
        dict | None: JobResult wire dict
    """
    is_last_attempt = self.request.retries >= self.max_retries
    return asyncio.run(_run_with_fresh_container(job_id, is_last_attempt))
