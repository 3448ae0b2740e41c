"""
Tests for CeleryJobBackend over SQLite with a mocked Celery app, and for
the worker's run_job flow.
"""

import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from docflow.application.queue.celery_backend import (
    PROCESS_DOCUMENTS_TASK,
    CeleryJobBackend,
    is_broker_reachable,
)
from docflow.boundary.db.CRUD.job_crud import job_crud
from docflow.configs import Settings
from docflow.configs.embedding import EmbeddingSettings
from docflow.core.exceptions import QueueError
from docflow.dependencies import ServiceContainer
from docflow.models.job import (
    FileDescriptor,
    FileResultStatus,
    JobPayload,
    JobStatus,
    JobType,
    ProcessingOptions,
)


def _payload(files: list[FileDescriptor] | None = None, batch_id: str = "batch-1") -> JobPayload:
    return JobPayload(
        type=JobType.PROCESS_BATCH_DOCUMENTS,
        batch_id=batch_id,
        files=files
        or [
            FileDescriptor(
                file_id="f1", original_name="f1.txt", file_path="/tmp/f1.txt", mime_type="text/plain"
            )
        ],
        options=ProcessingOptions(vectorize=True),
    )


@pytest.fixture
def celery_app() -> MagicMock:
    return MagicMock()


@pytest.fixture
def backend(session_factory, celery_app: MagicMock) -> CeleryJobBackend:
    return CeleryJobBackend(session_factory, celery_app)


class TestCeleryJobBackendSubmit:
    """Test submit()."""

    @pytest.mark.asyncio
    async def test_submit_persists_waiting_row_and_sends_task(
        self,
        backend: CeleryJobBackend,
        celery_app: MagicMock,
    ) -> None:
        job_id = await backend.submit(_payload())

        uuid.UUID(job_id)
        celery_app.send_task.assert_called_once_with(
            PROCESS_DOCUMENTS_TASK, args=[job_id], task_id=job_id
        )
        status = await backend.get_status(job_id)
        assert status.status == JobStatus.WAITING
        assert status.progress == 0
        assert status.total == 1
        assert status.batch_id == "batch-1"

    @pytest.mark.asyncio
    async def test_dispatch_failure_raises_and_removes_row(
        self,
        backend: CeleryJobBackend,
        celery_app: MagicMock,
    ) -> None:
        celery_app.send_task.side_effect = ConnectionError("broker gone")

        with pytest.raises(QueueError):
            await backend.submit(_payload())

        assert (await backend.stats()).total == 0


class TestCeleryJobBackendQueries:
    """Test status, batch listing, stats and cancel."""

    @pytest.mark.asyncio
    async def test_get_status_of_non_uuid_id(self, backend: CeleryJobBackend) -> None:
        assert await backend.get_status("job_1") is None

    @pytest.mark.asyncio
    async def test_status_reflects_result(self, backend: CeleryJobBackend, session_factory) -> None:
        job_id = await backend.submit(_payload())
        async with session_factory() as session:
            await job_crud.mark_completed(
                session,
                uuid.UUID(job_id),
                {
                    "batchId": "batch-1",
                    "totalFiles": 1,
                    "processedFiles": 1,
                    "failedFiles": 0,
                    "results": [
                        {"fileId": "f1", "originalName": "f1.txt", "status": "completed"}
                    ],
                },
            )
            await session.commit()

        status = await backend.get_status(job_id)

        assert status.status == JobStatus.COMPLETED
        assert status.progress == 100
        assert status.processed == 1
        assert status.result.results[0].status == FileResultStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_list_batch(self, backend: CeleryJobBackend) -> None:
        first = await backend.submit(_payload(batch_id="b1"))
        await backend.submit(_payload(batch_id="b2"))

        jobs = await backend.list_batch("b1")

        assert [job.job_id for job in jobs] == [first]

    @pytest.mark.asyncio
    async def test_stats(self, backend: CeleryJobBackend) -> None:
        await backend.submit(_payload())
        await backend.submit(_payload())

        stats = await backend.stats()

        assert stats.waiting == 2
        assert stats.total == 2

    @pytest.mark.asyncio
    async def test_cancel_removes_row_and_revokes(
        self,
        backend: CeleryJobBackend,
        celery_app: MagicMock,
    ) -> None:
        job_id = await backend.submit(_payload())

        assert await backend.cancel(job_id) is True

        celery_app.control.revoke.assert_called_once_with(job_id)
        assert await backend.get_status(job_id) is None
        assert await backend.cancel(job_id) is False


class TestCeleryJobBackendCleanup:
    """Test cleanup()."""

    @pytest.mark.asyncio
    async def test_cleanup_by_age(self, backend: CeleryJobBackend, session_factory) -> None:
        now = datetime.now(timezone.utc)
        ids = [await backend.submit(_payload()) for _ in range(3)]
        async with session_factory() as session:
            await job_crud.update_by_id(
                session, uuid.UUID(ids[0]), status=JobStatus.COMPLETED, updated_at=now - timedelta(hours=25)
            )
            await job_crud.update_by_id(
                session, uuid.UUID(ids[1]), status=JobStatus.FAILED, updated_at=now - timedelta(days=2)
            )
            await job_crud.update_by_id(
                session, uuid.UUID(ids[2]), status=JobStatus.FAILED, updated_at=now - timedelta(days=8)
            )
            await session.commit()

        removed = await backend.cleanup(now=now)

        assert removed == 2
        assert await backend.get_status(ids[1]) is not None


class TestBrokerReachability:
    """Test is_broker_reachable()."""

    def test_connection_error_means_unreachable(self) -> None:
        app = MagicMock()
        app.connection_for_write.return_value.__enter__.return_value.ensure_connection.side_effect = (
            ConnectionRefusedError("refused")
        )

        assert is_broker_reachable(app, timeout=0.1) is False

    def test_successful_connection(self) -> None:
        assert is_broker_reachable(MagicMock()) is True


@pytest.fixture
def container(db_engine) -> ServiceContainer:
    """Service container on the SQLite engine with fallback embeddings."""
    settings = Settings(embedding=EmbeddingSettings(api_key=None))
    return ServiceContainer(settings, engine=db_engine)


class TestRunJob:
    """Test the worker's run_job flow."""

    @pytest.mark.asyncio
    async def test_run_job_completes_row(
        self,
        container: ServiceContainer,
        make_text_file,
        make_file_descriptor,
    ) -> None:
        from docflow.workers.tasks.document_processing import run_job

        backend = CeleryJobBackend(container.session_factory, MagicMock())
        path = make_text_file("A.txt", "Durable processing works.")
        job_id = await backend.submit(_payload([make_file_descriptor(path)]))

        result = await run_job(container, job_id)

        status = await backend.get_status(job_id)
        assert result["processedFiles"] == 1
        assert status.status == JobStatus.COMPLETED
        assert status.progress == 100
        assert status.result.results[0].vectorized is True

    @pytest.mark.asyncio
    async def test_run_job_for_cancelled_job(self, container: ServiceContainer) -> None:
        from docflow.workers.tasks.document_processing import run_job

        assert await run_job(container, str(uuid.uuid4())) is None

    @pytest.mark.asyncio
    async def test_job_level_failure(self, container: ServiceContainer) -> None:
        from docflow.workers.tasks.document_processing import run_job

        backend = CeleryJobBackend(container.session_factory, MagicMock())
        job_id = await backend.submit(_payload())
        container._job_processor = MagicMock()
        container._job_processor.process = AsyncMock(side_effect=RuntimeError("worker crashed"))

        with pytest.raises(RuntimeError):
            await run_job(container, job_id, is_last_attempt=False)
        retrying = await backend.get_status(job_id)

        with pytest.raises(RuntimeError):
            await run_job(container, job_id, is_last_attempt=True)
        failed = await backend.get_status(job_id)

        assert retrying.status == JobStatus.WAITING
        assert retrying.error == "worker crashed"
        assert failed.status == JobStatus.FAILED
