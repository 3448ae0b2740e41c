"""
Job service orchestrator.

Front door of the job queue. The backend is chosen once: Celery when it is
configured and its broker answers at startup, the in-process queue
otherwise. Whenever the Celery backend raises, the call is answered by the
in-process backend instead.

Dependencies: docflow.application.queue, celery
System role: Job management orchestration
"""

import logging
from datetime import timedelta

from celery import Celery
from sqlalchemy.ext.asyncio import async_sessionmaker

from docflow.application.queue.celery_backend import CeleryJobBackend, is_broker_reachable
from docflow.application.queue.memory_backend import InProcessJobBackend
from docflow.application.services.job_processor import JobProcessor
from docflow.configs.queue import QueueSettings
from docflow.models.job import JobPayload, JobStatusRecord, QueueStats
from docflow.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class JobService:
    """
    Job service orchestrator.

    Submits jobs and reports their status across the durable backend (if
    any) and the always-present in-process backend.
    """

    def __init__(
        self,
        memory_backend: InProcessJobBackend,
        durable_backend: CeleryJobBackend | None = None,
    ) -> None:
        """
        Initialize job service.

        Args:
            memory_backend: In-process queue, also the fallback
            durable_backend: Celery backend (None runs everything in process)
        """
        self._memory = memory_backend
        self._durable = durable_backend

    @classmethod
    def from_settings(
        cls,
        settings: QueueSettings,
        processor: JobProcessor,
        session_factory: async_sessionmaker | None = None,
        celery_app: Celery | None = None,
    ) -> "JobService":
        """
        Build the service and select the backend.

        Args:
            settings: Queue settings
            processor: Per-file processor for the in-process backend
            session_factory: Session factory for the jobs table
            celery_app: Celery app (required for the Celery backend)

        Returns:
            JobService: Service with the selected backend
        """
        memory_backend = InProcessJobBackend(
            processor,
            completed_max_age=timedelta(hours=settings.completed_max_age_hours),
        )

        backend = settings.backend.lower()
        if backend == "celery":
            if session_factory is None or celery_app is None:
                logger.warning(
                    f"{__name__}:from_settings - Celery backend needs a database and a Celery app, "
                    "using in-process queue"
                )
            elif is_broker_reachable(celery_app, settings.broker_connect_timeout):
                logger.info(f"{__name__}:from_settings - Using Celery job backend")
                return cls(
                    memory_backend,
                    CeleryJobBackend(
                        session_factory,
                        celery_app,
                        completed_max_age=timedelta(hours=settings.completed_max_age_hours),
                        failed_max_age=timedelta(hours=settings.failed_max_age_hours),
                    ),
                )
            else:
                logger.warning(
                    f"{__name__}:from_settings - Celery broker unreachable, using in-process queue"
                )
        elif backend != "memory":
            raise ValueError(f"Invalid QUEUE_BACKEND: {backend}. Must be 'celery' or 'memory'.")

        logger.info(f"{__name__}:from_settings - Using in-process job backend")
        return cls(memory_backend)

    @property
    def uses_durable_backend(self) -> bool:
        return self._durable is not None

    def _log_durable_failure(self, operation: str, e: Exception, **context) -> None:
        log_exception_with_context(
            logger,
            f"{__name__}:{operation} - Celery backend failed, using in-process queue",
            e,
            level=logging.WARNING,
            **context,
        )

    async def submit(self, payload: JobPayload) -> str:
        """
        Queue a job.

        Args:
            payload: Job payload

        Returns:
            str: Job id (UUID string from Celery, job_N in process)
        """
        if self._durable is not None:
            try:
                return await self._durable.submit(payload)
            except Exception as e:
                self._log_durable_failure("submit", e, batch_id=payload.batch_id)
        return await self._memory.submit(payload)

    async def get_status(self, job_id: str) -> JobStatusRecord | None:
        """Current status of a job, or None if it is unknown."""
        if self._durable is not None:
            try:
                status = await self._durable.get_status(job_id)
                if status is not None:
                    return status
            except Exception as e:
                self._log_durable_failure("get_status", e, job_id=job_id)
        return await self._memory.get_status(job_id)

    async def get_batch_status(self, batch_id: str) -> list[JobStatusRecord]:
        """Status of every job sharing a batch id, from both backends."""
        statuses: list[JobStatusRecord] = []
        if self._durable is not None:
            try:
                statuses.extend(await self._durable.list_batch(batch_id))
            except Exception as e:
                self._log_durable_failure("get_batch_status", e, batch_id=batch_id)
        statuses.extend(await self._memory.list_batch(batch_id))
        return statuses

    async def cancel(self, job_id: str) -> bool:
        """
        Cancel a job.

        Celery jobs are removed whatever their state; in-process jobs only
        while still waiting.
        """
        if self._durable is not None:
            try:
                if await self._durable.cancel(job_id):
                    return True
            except Exception as e:
                self._log_durable_failure("cancel", e, job_id=job_id)
        return await self._memory.cancel(job_id)

    async def cleanup(self) -> int:
        """Prune old finished jobs. Returns the number removed."""
        removed = 0
        if self._durable is not None:
            try:
                removed += await self._durable.cleanup()
            except Exception as e:
                self._log_durable_failure("cleanup", e)
        removed += await self._memory.cleanup()
        return removed

    async def get_queue_stats(self) -> QueueStats:
        """Job counts per state from the active backend."""
        if self._durable is not None:
            try:
                return await self._durable.stats()
            except Exception as e:
                self._log_durable_failure("get_queue_stats", e)
        return await self._memory.stats()

    async def wait_until_idle(self) -> None:
        """Wait for the in-process queue to drain."""
        await self._memory.wait_until_idle()
